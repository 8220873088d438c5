"""Shared test helpers (fake fetchers, sample data)"""
import io

from faker import Faker
from PIL import Image as PILImage

from core.errors import UpstreamFetchError
from models.installation_model import InstallationFields

fake = Faker()


def png_bytes(width: int = 40, height: int = 20, color: str = "red") -> bytes:
    buffer = io.BytesIO()
    PILImage.new("RGB", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


class OfflineFetcher:
    """每次抓圖都失敗（模擬上游無法連線）"""

    def __init__(self):
        self.requested = []

    async def fetch_async(self, url: str) -> bytes:
        self.requested.append(url)
        raise UpstreamFetchError(f"Failed to fetch image from {url}: network unreachable", url=url)


class StaticFetcher:
    """固定回傳同一張 PNG"""

    def __init__(self, data: bytes | None = None):
        self.data = data or png_bytes()
        self.requested = []

    async def fetch_async(self, url: str) -> bytes:
        self.requested.append(url)
        return self.data


def installation_fields(**overrides) -> InstallationFields:
    data = {
        "partName": "Elastic Rail Clip",
        "partSubType": "Type J",
        "manufacturerNumber": fake.bothify("MFG-####"),
        "batch": fake.bothify("B-2024-##"),
        "vendorNumber": fake.bothify("V-###"),
        "warranty": "5 years",
        "address": fake.street_address(),
        "dateOfSupply": "2024-01-10",
        "dateOfCommencement": "2024-02-01",
        "qrCode": fake.bothify("QR-#####"),
    }
    data.update(overrides)
    return InstallationFields(**data)


def truncated_png(width: int = 800, height: int = 600) -> bytes:
    """header 完整、像素資料只剩一半的 PNG"""
    buffer = io.BytesIO()
    PILImage.effect_noise((width, height), 64).convert("RGB").save(buffer, format="PNG")
    data = buffer.getvalue()
    return data[: len(data) // 2]
