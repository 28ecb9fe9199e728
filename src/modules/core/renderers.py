from rest_framework.renderers import BaseRenderer


class PlainTextRenderer(BaseRenderer):
    """Render a string payload as ``text/plain``."""

    media_type = "text/plain"
    format = "txt"
    charset = "utf-8"

    def render(self, data, accepted_media_type=None, renderer_context=None) -> bytes:
        if data is None:
            return b""
        return str(data).encode(self.charset)
