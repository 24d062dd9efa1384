"""
测试配置和fixtures
为所有测试提供共享的配置和fixtures
"""

import pytest

from cos_filesystem.config.cos_config import CosAdapterConfig
from cos_filesystem.storage.adapters.tencent_cos import TencentCosAdapter
from tests.utils import FakeCosClient, MockBuilder



@pytest.fixture
def cos_config():
    """测试用COS配置"""
    return CosAdapterConfig(
        bucket="examplebucket",
        app_id="1250000000",
        secret_id="test-secret-id",
        secret_key="test-secret-key",
        region="ap-guangzhou",
        scheme="https",
    )


@pytest.fixture
def prefixed_config(cos_config):
    """带前缀的测试用COS配置"""
    return cos_config.model_copy(update={"prefix": "uploads"})


@pytest.fixture
def mock_client():
    """COS SDK客户端mock"""
    return MockBuilder.create_mock_cos_client()


@pytest.fixture
def adapter(cos_config, mock_client):
    """使用mock客户端的适配器"""
    return TencentCosAdapter(cos_config, client=mock_client)


@pytest.fixture
def fake_client():
    """内存版COS客户端"""
    return FakeCosClient()


@pytest.fixture
def fake_adapter(prefixed_config, fake_client):
    """使用内存版客户端、带前缀的适配器"""
    return TencentCosAdapter(prefixed_config, client=fake_client)


# 测试标记配置
def pytest_configure(config):
    """配置pytest标记"""
    config.addinivalue_line("markers", "unit: 单元测试")
    config.addinivalue_line("markers", "storage: 存储适配器测试")
    config.addinivalue_line("markers", "config: 配置测试")
    config.addinivalue_line("markers", "logging: 日志测试")
    config.addinivalue_line("markers", "imports: 模块导入测试")
