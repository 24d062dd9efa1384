"""
存储工具单元测试
测试可见性转换、响应头解析与厂商异常边界
"""

from unittest.mock import patch

import pytest

from cos_filesystem.storage.exceptions import ReadError
from cos_filesystem.storage.models import Visibility
from cos_filesystem.storage.utils import (
    fault_boundary,
    is_not_found,
    is_public_read,
    normalize_visibility,
)
from cos_filesystem.storage.utils.headers import (
    extract_custom_metadata,
    get_header,
    normalize_meta_key,
    parse_http_date,
    parse_int,
    parse_iso_date,
)
from tests.utils import make_client_error, make_service_error

ALL_USERS = {'Type': 'Group', 'URI': 'http://cam.qcloud.com/groups/global/AllUsers'}


@pytest.mark.unit
@pytest.mark.storage
class TestVisibilityMapping:
    """可见性与ACL转换测试"""

    @pytest.mark.parametrize("visibility, acl", [
        (Visibility.PUBLIC, "public-read"),
        ("public", "public-read"),
        (Visibility.PRIVATE, "private"),
        (Visibility.DEFAULT, "default"),
        ("", "default"),
        (None, "default"),
        ("public-read-write", "public-read-write"),
    ])
    def test_normalize_visibility(self, visibility, acl):
        """测试可见性映射为ACL字符串"""
        assert normalize_visibility(visibility) == acl

    def test_public_read_with_single_grant(self):
        """测试只有一条授权（字典形式）的ACL"""
        response = {'AccessControlList': {'Grant': {'Grantee': ALL_USERS, 'Permission': 'READ'}}}
        assert is_public_read(response) is True

    def test_public_read_with_grant_list(self):
        """测试多条授权（列表形式）的ACL"""
        response = {'AccessControlList': {'Grant': [
            {'Grantee': {'Type': 'CanonicalUser', 'ID': 'owner'}, 'Permission': 'FULL_CONTROL'},
            {'Grantee': ALL_USERS, 'Permission': 'READ'},
        ]}}
        assert is_public_read(response) is True

    @pytest.mark.parametrize("response", [
        {},
        {'AccessControlList': {}},
        {'AccessControlList': {'Grant': {'Grantee': ALL_USERS, 'Permission': 'WRITE'}}},
        {'AccessControlList': {'Grant': [
            {'Grantee': {'Type': 'CanonicalUser', 'ID': 'owner'}, 'Permission': 'READ'},
        ]}},
    ])
    def test_not_public_read(self, response):
        """测试没有所有用户组 READ 授权时不是公共读"""
        assert is_public_read(response) is False


@pytest.mark.unit
@pytest.mark.storage
class TestHeaders:
    """响应头解析测试"""

    def test_get_header_case_insensitive(self):
        """测试大小写不敏感读取响应头"""
        headers = {'content-length': '10', 'Content-Type': 'text/plain'}

        assert get_header(headers, 'Content-Length') == '10'
        assert get_header(headers, 'content-type') == 'text/plain'
        assert get_header(headers, 'ETag') is None

    def test_parse_http_date(self):
        """测试解析 Last-Modified"""
        assert parse_http_date('Sun, 01 Jan 2023 00:00:00 GMT') == 1672531200
        assert parse_http_date(None) is None
        assert parse_http_date('not a date') is None

    def test_parse_iso_date(self):
        """测试解析列举结果中的 LastModified"""
        assert parse_iso_date('2023-01-01T00:00:00.000Z') == 1672531200
        assert parse_iso_date('2023-01-01T00:00:00') == 1672531200
        assert parse_iso_date('') is None
        assert parse_iso_date('yesterday') is None

    def test_parse_int(self):
        """测试解析整数"""
        assert parse_int('1024') == 1024
        assert parse_int(None) is None
        assert parse_int('') is None
        assert parse_int('abc') is None

    def test_custom_metadata(self):
        """测试自定义元数据键的规范化与提取"""
        assert normalize_meta_key('Author') == 'x-cos-meta-author'
        assert normalize_meta_key('X-Cos-Meta-Author') == 'x-cos-meta-author'

        headers = {'Content-Type': 'text/plain', 'X-Cos-Meta-Author': 'alice', 'x-cos-meta-v': '2'}
        assert extract_custom_metadata(headers) == {
            'x-cos-meta-author': 'alice',
            'x-cos-meta-v': '2',
        }


@pytest.mark.unit
@pytest.mark.storage
class TestFaultBoundary:
    """厂商异常边界测试"""

    def test_is_not_found(self):
        """测试 404 判断"""
        assert is_not_found(make_service_error(404)) is True
        assert is_not_found(make_service_error(403, "AccessDenied")) is False
        assert is_not_found(make_client_error()) is False
        assert is_not_found(ValueError("x")) is False

    def test_service_error_translated(self):
        """测试服务端异常转换为存储异常并保留原始异常"""
        error = make_service_error(500, "InternalError")

        with patch('cos_filesystem.storage.utils.errors.logger') as mock_logger:
            with pytest.raises(ReadError) as exc_info:
                with fault_boundary(lambda e: ReadError("a.txt", e), "read", key="a.txt"):
                    raise error

        assert exc_info.value.__cause__ is error
        assert exc_info.value.cause is error
        mock_logger.error.assert_called_once()
        kwargs = mock_logger.error.call_args[1]
        assert kwargs['operation'] == "read"
        assert kwargs['error_code'] == "READ_ERROR"
        assert kwargs['key'] == "a.txt"

    def test_client_error_translated(self):
        """测试客户端异常转换为存储异常"""
        with pytest.raises(ReadError):
            with fault_boundary(lambda e: ReadError("a.txt", e), "read"):
                raise make_client_error()

    def test_other_errors_propagate(self):
        """测试非厂商异常原样传播"""
        with pytest.raises(KeyError):
            with fault_boundary(lambda e: ReadError("a.txt", e), "read"):
                raise KeyError("Body")

    def test_no_error(self):
        """测试没有异常时正常返回"""
        with fault_boundary(lambda e: ReadError("a.txt", e), "read"):
            value = 1
        assert value == 1
