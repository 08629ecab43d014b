"""S3-compatible backend using boto3.

Whole objects are sent with PutObject. S3 has no native resumable session,
so one is emulated with a multipart upload:

- opening a session initiates the multipart upload
- each chunk becomes the next part; the final chunk also completes it
- the resume offset is the sum of the listed part sizes while the upload
  is open, and the object's ContentLength once it is complete

Providers enforce a 5 MiB minimum size on every part except the last, so
chunks below that size are rejected when the upload completes.
"""

import time
from dataclasses import dataclass, field
from typing import Any

import boto3
from botocore.client import Config

from src.models import BackendConfig
from src.storage import StorageClient, StorageError


def build_s3_client(config: BackendConfig):
    """Build a boto3 S3 client for the given backend configuration.

    Args:
        config: Backend configuration containing endpoint, credentials,
               region, and addressing style.

    Returns:
        A boto3 S3 client configured for the provider.
    """
    options: dict[str, Any] = {
        "signature_version": "s3v4",
        "s3": {"addressing_style": config.s3_addressing_style},
        # A failed request ends the benchmark, botocore must not retry it
        "retries": {"max_attempts": 1, "mode": "standard"},
    }
    if config.timeout:
        options["connect_timeout"] = config.timeout
        options["read_timeout"] = config.timeout
    boto_config = Config(**options)

    return boto3.client(
        "s3",
        endpoint_url=config.s3_endpoint_url,
        aws_access_key_id=config.s3_access_key,
        aws_secret_access_key=config.s3_secret_key,
        region_name=config.s3_region,
        config=boto_config,
    )


@dataclass
class S3UploadSession:
    """Handle for an emulated resumable upload."""

    bucket: str
    key: str
    upload_id: str
    parts: list[dict] = field(default_factory=list)
    bytes_sent: int = 0
    completed: bool = False


class S3Client(StorageClient):
    """StorageClient backed by a boto3 S3 client."""

    def __init__(self, s3_client: Any):
        """Initialize the backend.

        Args:
            s3_client: boto3 S3 client
        """
        self.s3_client = s3_client

    def upload_object(self, bucket: str, name: str, data: bytes) -> float:
        start = time.perf_counter()
        self.s3_client.put_object(Bucket=bucket, Key=name, Body=data)
        return time.perf_counter() - start

    def new_upload_session(self, bucket: str, name: str) -> S3UploadSession:
        response = self.s3_client.create_multipart_upload(Bucket=bucket, Key=name)
        return S3UploadSession(bucket=bucket, key=name, upload_id=response["UploadId"])

    def upload_object_part(
        self,
        session: S3UploadSession,
        offset: int,
        data: bytes,
        is_final: bool,
    ) -> float:
        if session.completed:
            raise StorageError(f"Upload {session.upload_id} is already complete")
        # Parts can only be appended in order
        if offset != session.bytes_sent:
            raise StorageError(
                f"Cannot write at offset {offset}: upload {session.upload_id} "
                f"has {session.bytes_sent} bytes"
            )

        part_number = len(session.parts) + 1
        start = time.perf_counter()
        response = self.s3_client.upload_part(
            Bucket=session.bucket,
            Key=session.key,
            UploadId=session.upload_id,
            PartNumber=part_number,
            Body=data,
        )
        session.parts.append({"PartNumber": part_number, "ETag": response["ETag"]})
        session.bytes_sent += len(data)

        if is_final:
            self.s3_client.complete_multipart_upload(
                Bucket=session.bucket,
                Key=session.key,
                UploadId=session.upload_id,
                MultipartUpload={"Parts": list(session.parts)},
            )
            session.completed = True
        return time.perf_counter() - start

    def get_resume_offset(self, session: S3UploadSession) -> tuple[int, bool]:
        if session.completed:
            response = self.s3_client.head_object(Bucket=session.bucket, Key=session.key)
            return int(response["ContentLength"]), True

        paginator = self.s3_client.get_paginator("list_parts")
        offset = 0
        for page in paginator.paginate(
            Bucket=session.bucket,
            Key=session.key,
            UploadId=session.upload_id,
        ):
            offset += sum(part["Size"] for part in page.get("Parts", []))
        return offset, False
