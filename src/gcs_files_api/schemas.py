####################################
# --- Request/response schemas --- #
####################################

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from gcs_files_api.gateway import StoredFile, UploadResult


class CamelModel(BaseModel):
    """Serialize snake_case fields with the camelCase names the browser client reads."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FileMetadata(CamelModel):
    """Metadata of a file in the bucket."""
    name: str = Field(
        description="The object key inside the bucket.",
        json_schema_extra={"example": "1700000000000-photo.png"},
    )
    size: Optional[str] = Field(
        None,
        description="The size of the object in bytes, as the provider reports it.",
        json_schema_extra={"example": "1024"},
    )
    content_type: Optional[str] = Field(None, description="The MIME type given at upload time.")
    time_created: Optional[datetime] = Field(None, description="When the object was created.")
    updated: Optional[datetime] = Field(None, description="When the object metadata last changed.")
    url: str = Field(description="Public URL; reachable only if the object is publicly readable.")

    @classmethod
    def from_stored_file(cls, stored_file: StoredFile) -> "FileMetadata":
        return cls(
            name=stored_file.name,
            size=str(stored_file.size) if stored_file.size is not None else None,
            content_type=stored_file.content_type,
            time_created=stored_file.time_created,
            updated=stored_file.updated,
            url=stored_file.url,
        )


class GetFilesResponse(BaseModel):
    """Response model for `GET /files`."""
    files: List[FileMetadata]
    count: int

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "files": [
                    {
                        "name": "1700000000000-photo.png",
                        "size": "1024",
                        "contentType": "image/png",
                        "timeCreated": "2023-11-14T22:13:20Z",
                        "updated": "2023-11-14T22:13:20Z",
                        "url": "https://storage.googleapis.com/my-bucket/1700000000000-photo.png",
                    }
                ],
                "count": 1,
            }
        }
    )


class UploadFileResponse(CamelModel):
    """Response model for `POST /upload`."""
    message: str = Field(description="A message about the operation.")
    url: str = Field(description="Public URL of the stored object.")
    file_name: str = Field(
        description="The name the object was stored under.",
        json_schema_extra={"example": "1700000000000-photo.png"},
    )
    size: int = Field(description="Number of bytes received.")
    type: Optional[str] = Field(None, description="The MIME type of the uploaded part.")

    @classmethod
    def from_upload_result(cls, result: UploadResult) -> "UploadFileResponse":
        return cls(
            message="File uploaded successfully",
            url=result.url,
            file_name=result.name,
            size=result.size,
            type=result.content_type,
        )


class DeleteFileResponse(CamelModel):
    """Response model for `DELETE /files?file=...`."""
    message: str
    file_name: str


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""
    error: str = Field(json_schema_extra={"example": "Failed to list files"})


class HealthResponse(BaseModel):
    """Response model for `GET /health`."""
    status: str
    storage: str
    bucket: Optional[str] = None
