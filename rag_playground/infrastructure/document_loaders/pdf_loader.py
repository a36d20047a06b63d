import io

from pypdf import PdfReader

from ...core.models.document import UploadedFile


class PDFLoader:

    MEDIA_TYPE = "application/pdf"

    def supports(self, file: UploadedFile) -> bool:
        return file.extension == "pdf" or file.media_type == self.MEDIA_TYPE

    def load(self, file: UploadedFile) -> str:
        reader = PdfReader(io.BytesIO(file.content))
        # Pages stay in order, empty ones included, separated by a blank line
        return "\n\n".join(page.extract_text() or "" for page in reader.pages)
