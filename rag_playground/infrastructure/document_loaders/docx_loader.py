import io

from docx import Document

from ...core.models.document import UploadedFile


class DocxLoader:

    MEDIA_TYPE = (
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    )

    def supports(self, file: UploadedFile) -> bool:
        return file.extension == "docx" or file.media_type == self.MEDIA_TYPE

    def load(self, file: UploadedFile) -> str:
        doc = Document(io.BytesIO(file.content))
        paragraphs = [p.text.strip() for p in doc.paragraphs if p.text.strip()]
        return "\n\n".join(paragraphs)
