from django.http import HttpResponse


class FileDownloadResponse(HttpResponse):
    """Rendered report or export served as an attachment"""

    def __init__(self, content, filename: str, content_type: str, **kwargs):
        super().__init__(content, content_type=content_type, **kwargs)
        self['Content-Disposition'] = f'attachment; filename="{filename}"'
