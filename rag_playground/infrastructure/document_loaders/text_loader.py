from ...core.models.document import UploadedFile


class TextLoader:

    EXTENSIONS = {"txt", "md", "json"}

    def supports(self, file: UploadedFile) -> bool:
        return file.extension in self.EXTENSIONS or file.media_type.startswith("text/")

    def load(self, file: UploadedFile) -> str:
        return file.content.decode("utf-8", errors="replace")
