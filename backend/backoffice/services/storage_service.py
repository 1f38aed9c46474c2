"""
对象存储服务（MinIO / S3兼容）
backend/backoffice/services/storage_service.py
- boto3为同步客户端，统一通过 asyncio.to_thread 调用，避免阻塞事件循环
- 上传时桶不存在则自动创建
"""
import asyncio
import logging
from typing import List, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from backoffice.core.config import settings

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """对象存储操作失败"""


class StorageService:
    def __init__(
        self,
        endpoint_url: str,
        access_key: str,
        secret_key: str,
        region: str = "us-east-1",
        presign_expires: int = 3600,
    ):
        self.presign_expires = presign_expires
        self._client = boto3.client(
            "s3",
            endpoint_url=endpoint_url,
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            # MinIO 使用路径风格访问
            config=Config(signature_version="s3v4", s3={"addressing_style": "path"}),
        )

    # ------------------------------
    # 同步实现（线程内执行）
    # ------------------------------
    def _bucket_exists_sync(self, bucket: str) -> bool:
        try:
            self._client.head_bucket(Bucket=bucket)
            return True
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("404", "NoSuchBucket"):
                return False
            raise

    def _ensure_bucket_sync(self, bucket: str) -> None:
        if not self._bucket_exists_sync(bucket):
            self._client.create_bucket(Bucket=bucket)
            logger.info(f"存储桶不存在，已自动创建：{bucket}")

    def _upload_sync(self, bucket: str, object_name: str, data: bytes, content_type: Optional[str]) -> None:
        self._ensure_bucket_sync(bucket)
        extra = {"ContentType": content_type} if content_type else {}
        self._client.put_object(Bucket=bucket, Key=object_name, Body=data, **extra)

    def _list_objects_sync(self, bucket: str, prefix: str) -> List[str]:
        names: List[str] = []
        paginator = self._client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=bucket, Prefix=prefix):
            names.extend(obj["Key"] for obj in page.get("Contents", []))
        return names

    # ------------------------------
    # 异步API
    # ------------------------------
    async def bucket_exists(self, bucket: str) -> bool:
        return await asyncio.to_thread(self._bucket_exists_sync, bucket)

    async def create_bucket(self, bucket: str) -> None:
        await asyncio.to_thread(self._ensure_bucket_sync, bucket)

    async def upload_file(self, bucket: str, object_name: str, data: bytes, content_type: Optional[str] = None) -> None:
        """上传文件（对象名相同则覆盖）"""
        try:
            await asyncio.to_thread(self._upload_sync, bucket, object_name, data, content_type)
        except ClientError as e:
            raise StorageError(f"上传文件失败 {bucket}/{object_name}: {e}") from e
        logger.info(f"文件上传成功 | 桶：{bucket} | 对象：{object_name} | 大小：{len(data)}")

    async def get_url(self, bucket: str, object_name: str, expires: Optional[int] = None) -> str:
        """生成预签名GET地址"""
        return await asyncio.to_thread(
            self._client.generate_presigned_url,
            "get_object",
            Params={"Bucket": bucket, "Key": object_name},
            ExpiresIn=expires or self.presign_expires,
        )

    async def list_objects(self, bucket: str, prefix: str = "") -> List[str]:
        return await asyncio.to_thread(self._list_objects_sync, bucket, prefix)


def create_storage_service() -> StorageService:
    """按全局配置创建MinIO存储服务"""
    return StorageService(
        endpoint_url=settings.MINIO_URL,
        access_key=settings.MINIO_ACCESS_KEY,
        secret_key=settings.MINIO_SECRET_KEY,
        region=settings.MINIO_REGION,
        presign_expires=settings.MINIO_PRESIGN_EXPIRES,
    )
