from io import BytesIO

import qrcode

from src.service.ticketing.app.interface.i_qr_code_renderer import IQrCodeRenderer


class QrCodeRenderer(IQrCodeRenderer):
    def __init__(self, *, box_size: int = 10, border: int = 4) -> None:
        self.box_size = box_size
        self.border = border

    def render_png(self, data: str) -> bytes:
        qr = qrcode.QRCode(
            version=None,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=self.box_size,
            border=self.border,
        )
        qr.add_data(data)
        qr.make(fit=True)
        img = qr.make_image(fill_color='black', back_color='white')

        buffered = BytesIO()
        img.save(buffered, 'PNG')
        return buffered.getvalue()
