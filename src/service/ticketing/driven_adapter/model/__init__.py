"""
Database Models

Every model is registered with SQLAlchemy through src.platform.database.model_registry
"""
