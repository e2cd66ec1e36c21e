# blog_app/api/settings/schemas.py
from marshmallow import Schema, fields, EXCLUDE

class QrImageUploadSchema(Schema):
    """POST /settings/qr 요청 본문 (base64 data URI)."""
    class Meta:
        unknown = EXCLUDE

    image_data = fields.Str(data_key="imageData", load_default=None, allow_none=True)

class QrImageResponseSchema(Schema):
    qr_image_url = fields.Str(data_key="qrImageUrl", allow_none=True)
