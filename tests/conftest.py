import pytest

from restfully import ApiService, MockApiClient, PydanticJsonSerializer

BASE_URL = "https://api.example.com"


@pytest.fixture()
def serializer():
    return PydanticJsonSerializer()


@pytest.fixture()
def mock_client():
    return MockApiClient()


@pytest.fixture()
def service(mock_client, serializer):
    return ApiService(BASE_URL, "v1/users", mock_client, serializer)
