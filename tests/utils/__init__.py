"""
测试工具包
提供统一的测试工具和辅助函数
"""

from .fake_cos import FakeCosClient, FakeStreamBody, make_client_error, make_service_error
from .mock_utils import TEST_BUCKET, MockBuilder

__all__ = [
    'FakeCosClient',
    'FakeStreamBody',
    'make_client_error',
    'make_service_error',
    'MockBuilder',
    'TEST_BUCKET',
]
