from __future__ import annotations

from typing import Annotated, Optional, Union

from pydantic import Field

from .dispatch_helpers import invoke


async def download_document(
    id: Annotated[
        Optional[Union[str, int]],
        Field(description="ID of the document to download", examples=["8573a0d3-f6ea-4029-86d4-7a5359e054cc"]),
    ] = None,
) -> str:
    """Download a document by ID from aB-Agenta

    Returns:
        Content type, filename and size of the document followed by its
        content encoded as base64.
    """
    return await invoke("download_document", dict(locals()))


async def upload_document(
    addressid: Annotated[
        Optional[Union[str, int]],
        Field(description="ID of address-record to which the document belongs (e.g., 7)", examples=["7"]),
    ] = None,
    filepath: Annotated[Optional[str], Field(description="Path to the file to upload")] = None,
    filename: Annotated[
        Optional[str],
        Field(description="Filename for the document (e.g., scan_2022_1_1.pdf); defaults to the file's name"),
    ] = None,
    referenceid: Annotated[
        Optional[Union[str, int]],
        Field(description="ID of another record to which the document also belongs"),
    ] = None,
    referenceobjecttype: Annotated[
        Optional[Union[str, int]],
        Field(description="Objecttype of the reference record (e.g., -54346245)"),
    ] = None,
    info: Annotated[Optional[str], Field(description="Info text of the document (e.g., correspondence)")] = None,
    type: Annotated[Optional[str], Field(description="Type of the document (e.g., scan)")] = None,
    changedate: Annotated[
        Optional[str],
        Field(description="Datetime of last change of the document (ISO 8601 format, e.g., 2022-01-01T00:00:00)"),
    ] = None,
    idempotency_key: Annotated[
        Optional[str],
        Field(description="A unique key to realize idempotent behaviour (optional but recommended)"),
    ] = None,
    idempotencyKey: Annotated[Optional[str], Field(description="Same as idempotency_key")] = None,
) -> str:
    """Upload a file as a new document in aB-Agenta

    The file is read from the machine running the server.

    Returns:
        Confirmation text with the ID generated for the new document.
    """
    return await invoke("upload_document", dict(locals()))
