"""스토리지 서비스 — S3 또는 로컬 파일 저장.

Storage Service — Attachment blob storage on S3, or on local disk.
AWS 키가 비어있으면 자동으로 로컬 모드로 전환됩니다.
upload()가 반환하는 URL이 attachments.storage_key에 저장되고,
download()는 같은 URL로 내용을 다시 읽습니다.
"""

from pathlib import Path

import anyio
from botocore.exceptions import BotoCoreError, ClientError

from erp_hub.config import settings

_PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent.parent


class StorageError(Exception):
    """저장소 읽기/쓰기 실패 — Blob store read/write failure."""


def uploads_dir() -> Path:
    """로컬 업로드 디렉토리 — .env의 LOCAL_UPLOADS_DIR 또는 <project>/uploads/"""
    return Path(settings.LOCAL_UPLOADS_DIR) if settings.LOCAL_UPLOADS_DIR else _PROJECT_ROOT / "uploads"


class StorageService:
    """파일 저장 서비스 — S3 또는 로컬 모드 자동 선택."""

    def __init__(self) -> None:
        self._client = None

    @property
    def is_local(self) -> bool:
        return not settings.AWS_ACCESS_KEY_ID or not settings.AWS_S3_BUCKET

    @property
    def client(self):
        if self.is_local:
            return None
        if self._client is None:
            import boto3
            from botocore.config import Config as BotoConfig

            self._client = boto3.client(
                "s3",
                region_name=settings.AWS_S3_REGION,
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
                config=BotoConfig(signature_version="s3v4"),
            )
        return self._client

    @staticmethod
    def attachment_key(attachment_id: str, file_name: str) -> str:
        """첨부파일 저장 경로 — attachments/{id}/{파일명}"""
        safe_name = Path(file_name).name or "upload.bin"
        return f"attachments/{attachment_id}/{safe_name}"

    def _local_prefix(self) -> str:
        return f"{settings.PUBLIC_BASE_URL.rstrip('/')}/uploads/"

    def _s3_prefix(self) -> str:
        return f"https://{settings.AWS_S3_BUCKET}.s3.{settings.AWS_S3_REGION}.amazonaws.com/"

    def url_for(self, key: str) -> str:
        return f"{self._local_prefix() if self.is_local else self._s3_prefix()}{key}"

    def extract_key(self, file_url: str) -> str | None:
        """file URL에서 storage key를 추출합니다."""
        prefix = self._local_prefix() if self.is_local else self._s3_prefix()
        if file_url.startswith(prefix):
            return file_url[len(prefix):]
        return None

    async def upload(self, key: str, data: bytes, content_type: str) -> str:
        """내용을 저장하고 file URL을 반환합니다.

        Raises:
            StorageError: 저장 실패 시 (On any write failure)
        """
        if self.is_local:
            path = uploads_dir() / key

            def _write_file() -> None:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_bytes(data)

            try:
                await anyio.to_thread.run_sync(_write_file)
            except OSError as exc:
                raise StorageError(f"local write failed for {key}") from exc
            return self.url_for(key)

        client = self.client
        try:
            # boto3는 동기 API — 워커 스레드에서 실행 (sync boto3 => thread)
            await anyio.to_thread.run_sync(
                lambda: client.put_object(
                    Bucket=settings.AWS_S3_BUCKET,
                    Key=key,
                    Body=data,
                    ContentType=content_type,
                )
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"S3 upload failed for {key}") from exc
        return self.url_for(key)

    async def download(self, file_url: str) -> bytes:
        """저장된 내용을 읽어옵니다.

        Raises:
            StorageError: URL이 이 저장소 것이 아니거나 읽기 실패 시
        """
        key = self.extract_key(file_url)
        if not key:
            raise StorageError(f"unrecognized storage url: {file_url}")

        if self.is_local:
            path = uploads_dir() / key
            try:
                return await anyio.to_thread.run_sync(path.read_bytes)
            except OSError as exc:
                raise StorageError(f"local read failed for {key}") from exc

        client = self.client
        try:
            obj = await anyio.to_thread.run_sync(
                lambda: client.get_object(Bucket=settings.AWS_S3_BUCKET, Key=key)
            )
            return await anyio.to_thread.run_sync(obj["Body"].read)
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"S3 download failed for {key}") from exc


storage_service: StorageService = StorageService()
