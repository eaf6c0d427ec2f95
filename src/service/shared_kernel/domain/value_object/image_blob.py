import attrs


@attrs.define(frozen=True)
class ImageBlob:
    """An uploaded image before it reaches storage"""

    filename: str
    content_type: str
    data: bytes = attrs.field(repr=lambda data: f'<{len(data)} bytes>')
