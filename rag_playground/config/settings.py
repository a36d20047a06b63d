from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):

    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2"
    embedding_device: str | None = None

    # Sliding window over the extracted text, in characters
    chunk_step: int = Field(default=100, gt=0)
    chunk_window_size: int = Field(default=500, gt=0)

    display_page_size: int = Field(default=10, gt=0)
    vector_preview_size: int = Field(default=8, ge=0)

    allowed_extensions: list[str] = ["pdf", "docx", "txt", "md", "json"]

    log_level: str = "INFO"

    chainlit_host: str = "0.0.0.0"
    chainlit_port: int = 8000

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
