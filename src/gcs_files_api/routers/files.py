import logging
import time
from typing import Optional, Union

from fastapi import (
    APIRouter,
    Depends,
    File,
    HTTPException,
    Query,
    Request,
    UploadFile,
    status
)
from fastapi.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile as StarletteUploadFile

from gcs_files_api.errors import BadRequestError
from gcs_files_api.gateway import StorageGateway
from gcs_files_api.schemas import (
    DeleteFileResponse,
    ErrorResponse,
    FileMetadata,
    GetFilesResponse,
    UploadFileResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


def get_storage_gateway(request: Request) -> StorageGateway:
    return request.app.state.storage_gateway


def current_timestamp_ms() -> int:
    return int(time.time() * 1000)


def make_object_name(original_filename: str) -> str:
    """
    Name an uploaded object ``<millisecond-epoch>-<original filename>``.

    Not collision-proof: two uploads of the same filename within the same
    millisecond get the same name and the later one overwrites the earlier.
    """
    return f"{current_timestamp_ms()}-{original_filename}"


@router.get("/files", response_model=GetFilesResponse, responses=ERROR_RESPONSES)
def list_files(gateway: StorageGateway = Depends(get_storage_gateway)):
    """
    List every file in the bucket.

    Returns:
        GetFilesResponse: The files with their metadata and public URLs, and how many there are
    """
    try:
        stored_files = gateway.list_objects()
    except Exception:
        logger.exception("Error listing files")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list files"
        )

    files = [FileMetadata.from_stored_file(stored_file) for stored_file in stored_files]
    return GetFilesResponse(files=files, count=len(files))


@router.post("/upload", response_model=UploadFileResponse, responses=ERROR_RESPONSES)
async def upload_file(
    file: Union[UploadFile, str, None] = File(None, description="The file to upload"),
    gateway: StorageGateway = Depends(get_storage_gateway),
):
    """
    Upload a file under a timestamp-prefixed name and try to make it public.

    The whole file is read into memory before it is sent to the bucket.

    Args:
        file: The multipart file part named ``file``

    Returns:
        UploadFileResponse: The stored name, its public URL, size and MIME type
    """
    # a plain text field named `file` is treated the same as no file at all
    if not isinstance(file, StarletteUploadFile) or not file.filename:
        raise BadRequestError("No file provided")

    try:
        file_name = make_object_name(file.filename)
        file_bytes = await file.read()
        result = await run_in_threadpool(
            gateway.put_object, file_name, file_bytes, file.content_type
        )
    except Exception:
        logger.exception("Upload error for %s", file.filename)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to upload file"
        )

    return UploadFileResponse.from_upload_result(result)


@router.delete("/files", response_model=DeleteFileResponse, responses=ERROR_RESPONSES)
def delete_file(
    file: Optional[str] = Query(None, description="The exact name of the file to delete"),
    gateway: StorageGateway = Depends(get_storage_gateway),
):
    """
    Delete a file by its exact name.

    Deleting a name that does not exist is reported as a failure.
    """
    if not file:
        raise BadRequestError("File name is required")

    try:
        gateway.delete_object(file)
    except Exception:
        logger.exception("Error deleting file %s", file)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete file"
        )

    return DeleteFileResponse(message="File deleted successfully", file_name=file)
