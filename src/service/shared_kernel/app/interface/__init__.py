"""Shared Kernel Interfaces"""
