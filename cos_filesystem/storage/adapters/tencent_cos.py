"""
腾讯云COS存储适配器
实现BaseStorage接口，把通用文件系统操作翻译为腾讯云COS API调用
"""

import mimetypes
from typing import Any, BinaryIO, Dict, Iterator, List, Mapping, Optional, Union
from urllib.parse import quote

import httpx
from qcloud_cos import CosConfig, CosS3Client, CosServiceError

from cos_filesystem.config.cos_config import (
    CosAdapterConfig,
    get_bucket_name,
    get_cos_base_url,
    load_cos_config,
)
from cos_filesystem.log_messages import log_messages
from cos_filesystem.log_utils import get_logger
from cos_filesystem.storage.abc import BaseStorage, VisibilityLike
from cos_filesystem.storage.exceptions import (
    CopyError,
    DeleteError,
    ExistenceCheckError,
    HTTPError,
    MetadataError,
    NetworkError,
    ReadError,
    URLError,
    VisibilityError,
    WriteError,
)
from cos_filesystem.storage.models import (
    DirectoryAttributes,
    FileAttributes,
    MoveResult,
    StorageAttributes,
    Visibility,
)
from cos_filesystem.storage.path_prefixer import PathPrefixer
from cos_filesystem.storage.utils.acl import is_public_read, normalize_visibility
from cos_filesystem.storage.utils.errors import fault_boundary, is_not_found
from cos_filesystem.storage.utils.headers import (
    extract_custom_metadata,
    get_header,
    normalize_meta_key,
    parse_http_date,
    parse_int,
    parse_iso_date,
)

logger = get_logger(__name__)


class TencentCosAdapter(BaseStorage):
    """
    腾讯云COS存储适配器

    使用腾讯云COS SDK提供文件系统语义，支持：
    - 文件读写、删除、复制、移动
    - 基于目录标记对象和公共前缀的目录模拟
    - 可见性（ACL）与元数据查询
    - 公开URL与预签名URL生成

    所有公开方法接收逻辑路径，内部统一通过 PathPrefixer 转换为对象键，
    内部调用之间只传递对象键，保证前缀只添加一次。
    """

    # 适配器名称，用于工厂模式注册
    ADAPTER_NAME: str = "tencent_cos"

    SEPARATOR = "/"
    LIST_PAGE_SIZE = 1000
    # DeleteObjects 单次请求最多 1000 个对象
    BATCH_DELETE_LIMIT = 1000
    READ_CHUNK_SIZE = 64 * 1024

    def __init__(
        self,
        config: Union[CosAdapterConfig, Dict[str, Any], None] = None,
        client: Optional[CosS3Client] = None
    ) -> None:
        """
        初始化COS存储适配器

        Args:
            config: 适配器配置或配置字典，为空时从全局配置读取
            client: 预先构造的COS客户端，为空时在首次使用时创建
        """
        if isinstance(config, CosAdapterConfig):
            self.config = config
        else:
            self.config = load_cos_config(config)

        self.prefixer = PathPrefixer(self.config.prefix, self.SEPARATOR)
        self._client = client

    # ==================== 客户端与寻址 ====================

    def get_client(self) -> CosS3Client:
        """获取COS客户端，首次调用时创建并缓存"""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self) -> CosS3Client:
        cos_config = CosConfig(
            Region=self.config.region,
            SecretId=self.config.secret_id,
            SecretKey=self.config.secret_key,
            Token=self.config.token,
            Scheme=self.config.scheme,
            Timeout=self.config.timeout
        )
        logger.info(
            log_messages.CLIENT_CREATED,
            bucket=self.get_bucket(),
            region=self.config.region
        )
        return CosS3Client(cos_config)

    def get_bucket(self) -> str:
        """完整存储桶名称 <bucket>-<app_id>，不做校验"""
        return get_bucket_name(self.config)

    def _key(self, path: str) -> str:
        return self.prefixer.prefix_path(path)

    def _copy_source(self, key: str) -> Dict[str, str]:
        # SDK据此拼出 <bucket>-<appid>.cos.<region>.myqcloud.com/<key>
        return {
            'Bucket': self.get_bucket(),
            'Key': key,
            'Region': self.config.region,
        }

    # ==================== 存在性检查 ====================

    def file_exists(self, path: str) -> bool:
        key = self._key(path)

        with fault_boundary(lambda e: ExistenceCheckError(path, e), "file_exists", key=key):
            try:
                self.get_client().head_object(Bucket=self.get_bucket(), Key=key)
            except CosServiceError as e:
                if is_not_found(e):
                    return False
                raise

        return True

    # ==================== 写入 ====================

    def write(
        self,
        path: str,
        contents: Union[bytes, str],
        visibility: Optional[VisibilityLike] = None,
        mime_type: Optional[str] = None,
        metadata: Optional[Mapping[str, str]] = None
    ) -> None:
        """
        写入文件

        Args:
            path: 逻辑路径
            contents: 文件内容，字符串按 UTF-8 编码
            visibility: 可见性，为空时使用配置的默认可见性
            mime_type: MIME类型，为空时按扩展名推断
            metadata: 自定义元数据，键会统一为 x-cos-meta-* 形式

        Raises:
            WriteError: 写入失败时抛出
        """
        if isinstance(contents, str):
            contents = contents.encode("utf-8")
        self._upload(path, contents, visibility, mime_type, metadata)

    def write_stream(
        self,
        path: str,
        stream: BinaryIO,
        visibility: Optional[VisibilityLike] = None,
        mime_type: Optional[str] = None,
        metadata: Optional[Mapping[str, str]] = None
    ) -> None:
        """
        以流的形式写入文件

        文件对象直接作为请求体交给SDK，由SDK分块发送，不会整体读入内存。

        Raises:
            WriteError: 写入失败时抛出
        """
        self._upload(path, stream, visibility, mime_type, metadata)

    def _upload(
        self,
        path: str,
        body: Union[bytes, BinaryIO],
        visibility: Optional[VisibilityLike],
        mime_type: Optional[str],
        metadata: Optional[Mapping[str, str]]
    ) -> None:
        key = self._key(path)
        if visibility is None:
            visibility = self.config.visibility

        upload_params: Dict[str, Any] = {
            'Bucket': self.get_bucket(),
            'Key': key,
            'Body': body,
            'ACL': normalize_visibility(visibility),
        }

        content_type = mime_type or mimetypes.guess_type(key)[0]
        if content_type:
            upload_params['ContentType'] = content_type

        if metadata:
            upload_params['Metadata'] = {
                normalize_meta_key(name): value for name, value in metadata.items()
            }

        with fault_boundary(lambda e: WriteError(path, e), "write", key=key):
            client = self.get_client()
            if hasattr(body, 'read'):
                # 超过分块大小时SDK自动改用分块上传，不受单次 PUT 5GB 的限制
                client.upload_file_from_buffer(**upload_params)
            else:
                client.put_object(**upload_params)

        logger.debug(log_messages.FILE_WRITE_SUCCESS, key=key)

    # ==================== 读取 ====================

    def read(self, path: str) -> bytes:
        key = self._key(path)

        if self.config.read_from_cdn and self.config.cdn:
            return self._read_from_cdn(path, key)

        with fault_boundary(lambda e: ReadError(path, e), "read", key=key):
            response = self.get_client().get_object(Bucket=self.get_bucket(), Key=key)
            data = b"".join(response['Body'].get_stream(chunk_size=self.READ_CHUNK_SIZE))

        logger.debug(log_messages.FILE_READ_SUCCESS, key=key)
        return data

    def read_stream(self, path: str) -> BinaryIO:
        key = self._key(path)

        with fault_boundary(lambda e: ReadError(path, e), "read_stream", key=key):
            response = self.get_client().get_object(Bucket=self.get_bucket(), Key=key)

        return response['Body'].get_raw_stream()

    def _cdn_base(self) -> Optional[str]:
        cdn = self.config.cdn
        if not cdn:
            return None
        if "://" not in cdn:
            return "{}://{}".format(self.config.scheme, cdn)
        return cdn

    def _read_from_cdn(self, path: str, key: str) -> bytes:
        url = "{}/{}".format(self._cdn_base(), quote(key, safe="/~"))

        try:
            with httpx.Client(timeout=self.config.timeout) as client:
                response = client.get(url)
                response.raise_for_status()
                return response.content

        except httpx.HTTPStatusError as e:
            logger.error(
                "CDN读取HTTP错误",
                key=key,
                status_code=e.response.status_code
            )
            raise HTTPError(path, status_code=e.response.status_code, cause=e) from e
        except httpx.RequestError as e:
            logger.error("CDN读取网络错误", exception=e, key=key)
            raise NetworkError(path, cause=e) from e

    # ==================== 删除 ====================

    def delete(self, path: str) -> None:
        key = self._key(path)

        with fault_boundary(lambda e: DeleteError(path, e), "delete", key=key):
            self.get_client().delete_object(Bucket=self.get_bucket(), Key=key)

        logger.debug(log_messages.FILE_DELETE_SUCCESS, key=key)

    def delete_directory(self, path: str) -> None:
        """
        删除目录

        列举目录前缀下的全部对象键（包括目录标记本身），按列举的逆序逐个删除，
        或在 batch_delete 打开时分批调用 DeleteObjects。任一对象删除失败都会抛出
        绑定目录路径的 DeleteError，已删除的对象不会恢复。未配置前缀时不删除根目录。

        Args:
            path: 逻辑目录路径

        Raises:
            DeleteError: 列举或删除失败时抛出
        """
        prefix = self.prefixer.prefix_directory_path(path)
        if not prefix:
            # 未配置前缀时根目录前缀为空，会匹配整个存储桶
            logger.warning(log_messages.DIRECTORY_DELETE_SKIPPED, path=path)
            return

        with fault_boundary(lambda e: DeleteError(path, e), "delete_directory", key=prefix):
            keys = [
                content['Key']
                for response in self._iter_pages(prefix, delimiter="")
                for content in response.get('Contents') or []
            ]
            keys.reverse()

            if self.config.batch_delete:
                self._batch_delete(path, keys)
            else:
                client = self.get_client()
                for key in keys:
                    client.delete_object(Bucket=self.get_bucket(), Key=key)

        logger.info(log_messages.DIRECTORY_DELETE_SUCCESS, key=prefix, count=len(keys))

    def _batch_delete(self, path: str, keys: List[str]) -> None:
        client = self.get_client()

        for start in range(0, len(keys), self.BATCH_DELETE_LIMIT):
            chunk = keys[start:start + self.BATCH_DELETE_LIMIT]
            response = client.delete_objects(
                Bucket=self.get_bucket(),
                Delete={
                    'Object': [{'Key': key} for key in chunk],
                    'Quiet': 'true',
                }
            )

            errors = (response or {}).get('Error') or []
            if isinstance(errors, dict):
                errors = [errors]
            if errors:
                failed_keys = [error.get('Key') for error in errors]
                logger.error(
                    "COS批量删除部分失败",
                    key=path,
                    failed_keys=failed_keys
                )
                raise DeleteError(path, failed_keys=failed_keys)

    # ==================== 目录 ====================

    def create_directory(self, path: str, visibility: Optional[VisibilityLike] = None) -> None:
        key = self.prefixer.prefix_directory_path(path)
        if not key:
            # 未配置前缀时根目录总是存在
            return

        params: Dict[str, Any] = {
            'Bucket': self.get_bucket(),
            'Key': key,
            'Body': b'',
        }
        if visibility is not None:
            params['ACL'] = normalize_visibility(visibility)

        with fault_boundary(lambda e: WriteError(path, e), "create_directory", key=key):
            self.get_client().put_object(**params)

        logger.debug(log_messages.DIRECTORY_CREATE_SUCCESS, key=key)

    def list_contents(self, path: str = "", deep: bool = False) -> Iterator[StorageAttributes]:
        """
        列举目录内容

        deep 为 True 时不设置分隔符，递归列出所有对象；否则以 / 为分隔符只列一层，
        公共前缀作为目录返回。以 / 结尾的对象键视为目录标记，被列举目录自身的标记不返回。
        自动跟随 NextMarker 翻页，结果惰性产生。

        Args:
            path: 逻辑目录路径
            deep: 是否递归

        Returns:
            Iterator[StorageAttributes]: 文件/目录属性

        Raises:
            ReadError: 列举失败时抛出
        """
        prefix = self.prefixer.prefix_directory_path(path)
        delimiter = "" if deep else self.SEPARATOR

        with fault_boundary(lambda e: ReadError(path, e), "list_contents", key=prefix):
            for response in self._iter_pages(prefix, delimiter):
                for content in response.get('Contents') or []:
                    if content['Key'] == prefix:
                        continue
                    yield self._map_listing_entry(content)

                for common_prefix in response.get('CommonPrefixes') or []:
                    yield DirectoryAttributes(
                        path=self.prefixer.strip_directory_prefix(common_prefix['Prefix'])
                    )

    def _iter_pages(self, prefix: str, delimiter: str) -> Iterator[Dict[str, Any]]:
        client = self.get_client()
        marker = ""

        # 不传 EncodingType，由SDK以 encoding-type=url 请求并解码 Key、Prefix 与 NextMarker
        while True:
            response = client.list_objects(
                Bucket=self.get_bucket(),
                Prefix=prefix,
                Delimiter=delimiter,
                Marker=marker,
                MaxKeys=self.LIST_PAGE_SIZE
            )
            contents = response.get('Contents') or []
            logger.debug(log_messages.LIST_PAGE_FETCHED, prefix=prefix, count=len(contents))
            yield response

            if str(response.get('IsTruncated', 'false')).lower() != 'true':
                break

            # 未设置分隔符时COS可能不返回 NextMarker，以本页最后一个键继续
            marker = response.get('NextMarker') or (contents[-1]['Key'] if contents else "")
            if not marker:
                break

    def _map_listing_entry(self, content: Dict[str, Any]) -> StorageAttributes:
        key = content['Key']
        extra = {
            'ETag': content.get('ETag'),
            'StorageClass': content.get('StorageClass'),
            'Owner': content.get('Owner'),
        }
        last_modified = parse_iso_date(content.get('LastModified'))

        if key.endswith(self.SEPARATOR):
            return DirectoryAttributes(
                path=self.prefixer.strip_directory_prefix(key),
                last_modified=last_modified,
                extra_metadata=extra
            )

        return FileAttributes(
            path=self.prefixer.strip_prefix(key),
            file_size=parse_int(content.get('Size')),
            last_modified=last_modified,
            extra_metadata=extra
        )

    # ==================== 可见性 ====================

    def set_visibility(self, path: str, visibility: VisibilityLike) -> None:
        key = self._key(path)
        acl = normalize_visibility(visibility)

        with fault_boundary(lambda e: VisibilityError(path, e), "set_visibility", key=key):
            self.get_client().put_object_acl(Bucket=self.get_bucket(), Key=key, ACL=acl)

        logger.debug(log_messages.VISIBILITY_SET_SUCCESS, key=key, acl=acl)

    def visibility(self, path: str) -> FileAttributes:
        """
        获取文件可见性

        任一授权条目向所有用户组开放 READ 权限即为 public，否则为 private。
        """
        key = self._key(path)

        with fault_boundary(lambda e: MetadataError.visibility(path, e), "visibility", key=key):
            response = self.get_client().get_object_acl(Bucket=self.get_bucket(), Key=key)

        if is_public_read(response):
            return FileAttributes(path=path, visibility=Visibility.PUBLIC.value)
        return FileAttributes(path=path, visibility=Visibility.PRIVATE.value)

    # ==================== 元数据 ====================

    def mime_type(self, path: str) -> FileAttributes:
        attributes = self.get_metadata(path)
        if attributes.mime_type is None:
            raise MetadataError.mime_type(path)
        return attributes

    def last_modified(self, path: str) -> FileAttributes:
        attributes = self.get_metadata(path)
        if attributes.last_modified is None:
            raise MetadataError.last_modified(path)
        return attributes

    def file_size(self, path: str) -> FileAttributes:
        attributes = self.get_metadata(path)
        if attributes.file_size is None:
            raise MetadataError.file_size(path)
        return attributes

    def get_metadata(self, path: str) -> FileAttributes:
        """
        获取文件元数据

        HEAD 响应头映射为文件属性，原始响应头全部保留在 extra_metadata 中。

        Args:
            path: 逻辑路径

        Returns:
            FileAttributes: 文件属性

        Raises:
            MetadataError: 获取元数据失败时抛出
        """
        key = self._key(path)

        with fault_boundary(lambda e: MetadataError(path, cause=e), "get_metadata", key=key):
            headers = self.get_client().head_object(Bucket=self.get_bucket(), Key=key)

        return FileAttributes(
            path=path,
            file_size=parse_int(get_header(headers, 'Content-Length')),
            last_modified=parse_http_date(get_header(headers, 'Last-Modified')),
            mime_type=get_header(headers, 'Content-Type') or None,
            extra_metadata=dict(headers)
        )

    def set_metadata(self, path: str, metadata: Mapping[str, str]) -> None:
        """
        更新文件自定义元数据

        读取当前的 x-cos-meta-* 元数据，与传入的元数据合并后以 Replaced 模式复制到自身，
        原有的 Content-Type 保持不变。

        Args:
            path: 逻辑路径
            metadata: 需要新增或覆盖的元数据

        Raises:
            CopyError: 读取或复制失败时抛出
        """
        key = self._key(path)

        with fault_boundary(lambda e: CopyError(path, path, e), "set_metadata", key=key):
            client = self.get_client()
            headers = client.head_object(Bucket=self.get_bucket(), Key=key)

            merged = extract_custom_metadata(headers)
            merged.update({normalize_meta_key(name): value for name, value in metadata.items()})

            copy_params: Dict[str, Any] = {
                'Bucket': self.get_bucket(),
                'Key': key,
                'CopySource': self._copy_source(key),
                'CopyStatus': 'Replaced',
                'Metadata': merged,
            }
            content_type = get_header(headers, 'Content-Type')
            if content_type:
                copy_params['ContentType'] = content_type

            client.copy(**copy_params)

        logger.debug(log_messages.METADATA_SET_SUCCESS, key=key)

    # ==================== 复制与移动 ====================

    def copy(self, source: str, destination: str, visibility: Optional[VisibilityLike] = None) -> None:
        source_key = self._key(source)
        destination_key = self._key(destination)

        copy_params: Dict[str, Any] = {
            'Bucket': self.get_bucket(),
            'Key': destination_key,
            'CopySource': self._copy_source(source_key),
            'CopyStatus': 'Copy',
        }
        if visibility is not None:
            copy_params['ACL'] = normalize_visibility(visibility)

        with fault_boundary(
            lambda e: CopyError(source, destination, e),
            "copy",
            source=source_key,
            destination=destination_key
        ):
            # 源对象不小于5GB时SDK改用分块复制
            self.get_client().copy(**copy_params)

        logger.debug(
            log_messages.FILE_COPY_SUCCESS,
            source=source_key,
            destination=destination_key
        )

    def move(self, source: str, destination: str) -> MoveResult:
        """
        移动文件

        先复制再删除源文件，不具备原子性。复制失败直接抛出 CopyError；
        复制成功而删除失败时不抛出异常，返回 deleted=False 的结果，源文件与目标文件同时存在。

        Args:
            source: 源逻辑路径
            destination: 目标逻辑路径

        Returns:
            MoveResult: 各阶段完成情况

        Raises:
            CopyError: 复制失败时抛出
        """
        self.copy(source, destination)

        try:
            self.delete(source)
        except DeleteError as e:
            logger.warning(
                log_messages.MOVE_DELETE_FAILED,
                source=source,
                destination=destination
            )
            return MoveResult(source, destination, copied=True, deleted=False, error=e)

        return MoveResult(source, destination, copied=True, deleted=True)

    # ==================== URL ====================

    def get_url(self, path: str) -> str:
        """
        获取公开访问URL

        优先使用配置的 url，其次是 CDN 域名，最后是存储桶默认域名。
        """
        base = self.config.url or self._cdn_base() or get_cos_base_url(self.config)
        return "{}/{}".format(base, quote(self._key(path), safe="/~"))

    def get_temporary_url(
        self,
        path: str,
        expires: Optional[int] = None,
        method: str = "GET"
    ) -> str:
        """
        生成预签名访问URL

        Args:
            path: 逻辑路径
            expires: 过期时间（秒），为空时使用配置的 url_expires
            method: GET 或 PUT

        Returns:
            str: 预签名URL

        Raises:
            URLError: 操作类型不支持或生成失败时抛出
        """
        method = method.upper()
        if method not in ("GET", "PUT"):
            raise URLError("不支持的操作类型: {}".format(method), details={'location': path})

        key = self._key(path)
        expired = expires or self.config.url_expires

        with fault_boundary(
            lambda e: URLError("生成预签名URL失败: {}".format(e), details={'location': path}),
            "get_temporary_url",
            key=key
        ):
            return self.get_client().get_presigned_url(
                Method=method,
                Bucket=self.get_bucket(),
                Key=key,
                Expired=expired
            )


__all__ = ['TencentCosAdapter']
