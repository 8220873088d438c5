# backend/services/summary_service.py - 檢驗報告摘要（mock / OpenAI / Ollama 可替換）
from __future__ import annotations

import asyncio
import logging
import re
from typing import Optional

import requests

from core.config import Settings, settings
from core.errors import SummaryProviderError
from models.installation_model import Installation

logger = logging.getLogger(__name__)

NA = "N/A"

# 掃描 demo 用的靜態零件資料
PART_DETAILS = {
    "RC001": (
        "Part: High-tensile Rail Clip (RC001). Manufacturer: SteelTech Industries. "
        "Batch: ST-2024-A123. Status: Installed on 2024-03-15 at Track Section A-12. "
        "Condition: Good. Warranty: Valid until 2026-01-15."
    ),
    "PD045": (
        "Part: Standard Rail Pad (PD045). Manufacturer: FlexGuard Corp. "
        "Batch: FG-2024-B045. Status: In storage at Warehouse A. "
        "Condition: New. Warranty: Valid until 2029-02-10."
    ),
    "QR987": (
        "Part: Track Fastener (QR987). Manufacturer: SecureRail Inc. "
        "Batch: SRI-2023-X789. Status: Installed on 2023-11-01 at Track Section B-5. "
        "Condition: Minor wear. Warranty: Valid until 2025-11-01."
    ),
}


def na(value: Optional[str]) -> str:
    """空值 / 全空白 → "N/A" """
    if value is None or not str(value).strip():
        return NA
    return str(value)


# ─────────────────────────── 文字組裝 ───────────────────────────
def scan_summary_text(qr_data: str) -> str:
    known = PART_DETAILS.get(qr_data)
    if known:
        return known
    return (
        f"No detailed information available for part {na(qr_data)}. "
        "The scan has been logged successfully."
    )


def installation_summary_text(inst: Installation) -> str:
    return "\n".join([
        f"This is an AI-generated summary for part {inst.uid}.",
        f"Part Name: {na(inst.partName)} ({na(inst.partSubType)})",
        f"Installed at: {na(inst.address)} on {na(inst.dateOfCommencement)}.",
        f"Manufacturer No: {na(inst.manufacturerNumber)}.",
        f"Vendor No: {na(inst.vendorNumber)}.",
        f"Batch No: {na(inst.batch)}.",
        f"Supplied on: {na(inst.dateOfSupply)}.",
        f"Warranty: {na(inst.warranty)}.",
        f"QR Code: {na(inst.qrCode)}.",
        "This part appears to be in good condition based on the installation data.",
    ])


def installation_prompt(inst: Installation) -> str:
    return f"""Write a short inspection summary (3-5 sentences) for a railway track component.

COMPONENT DATA:
- UID: {inst.uid}
- Part name: {na(inst.partName)}
- Sub type: {na(inst.partSubType)}
- Installed at: {na(inst.address)}
- Date of commencement: {na(inst.dateOfCommencement)}
- Manufacturer number: {na(inst.manufacturerNumber)}
- Vendor number: {na(inst.vendorNumber)}
- Batch: {na(inst.batch)}
- Date of supply: {na(inst.dateOfSupply)}
- Warranty: {na(inst.warranty)}

Mention every value above verbatim, write "N/A" for missing values, and close with an assessment of the part's condition."""


def scan_prompt(qr_data: str) -> str:
    return f"""A field inspector scanned the QR code "{qr_data}" on a railway track component.
No installation record exists for it. Write one or two sentences confirming the scan was logged and
suggesting the inspector registers the part."""


def _strip_thinking(text: str) -> str:
    cleaned = re.sub(r"<think>.*?</think>", "", text, flags=re.DOTALL)
    return cleaned.strip()


# ─────────────────────────── Summarizer 介面 ───────────────────────────
class Summarizer:
    """input：掃描值或 installation 欄位；output：一段敘述文字"""

    name = "base"

    async def summarize_scan(self, qr_data: str) -> str:
        raise NotImplementedError

    async def summarize_installation(self, inst: Installation) -> str:
        raise NotImplementedError


class MockSummarizer(Summarizer):
    """靜態表 + 模板；delay 模擬外部 AI 呼叫延遲"""

    name = "mock"

    def __init__(self, delay_seconds: float = settings.SUMMARY_DELAY_SECONDS):
        self.delay_seconds = delay_seconds

    async def _simulate_latency(self) -> None:
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)

    async def summarize_scan(self, qr_data: str) -> str:
        summary = scan_summary_text(qr_data)
        await self._simulate_latency()
        return summary

    async def summarize_installation(self, inst: Installation) -> str:
        summary = installation_summary_text(inst)
        await self._simulate_latency()
        return summary


class PromptSummarizer(Summarizer):
    """真實 LLM 後端共用：組 prompt → worker thread 呼叫 → 錯誤轉 SummaryProviderError"""

    def __init__(self, timeout: float = settings.SUMMARIZER_TIMEOUT_SECONDS):
        self.timeout = timeout

    def generate(self, prompt: str) -> str:
        raise NotImplementedError

    async def _run(self, prompt: str) -> str:
        try:
            text = await asyncio.to_thread(self.generate, prompt)
        except SummaryProviderError:
            raise
        except requests.exceptions.Timeout as e:
            raise SummaryProviderError(f"{self.name} summarizer timed out") from e
        except requests.exceptions.RequestException as e:
            raise SummaryProviderError(f"{self.name} connection error: {e}") from e
        except (KeyError, IndexError, ValueError) as e:
            raise SummaryProviderError(f"{self.name} returned an unexpected response") from e

        if not text:
            raise SummaryProviderError(f"{self.name} returned an empty summary")
        return text

    async def summarize_scan(self, qr_data: str) -> str:
        if qr_data in PART_DETAILS:
            return PART_DETAILS[qr_data]
        return await self._run(scan_prompt(qr_data))

    async def summarize_installation(self, inst: Installation) -> str:
        return await self._run(installation_prompt(inst))


class OpenAISummarizer(PromptSummarizer):
    name = "openai"
    endpoint = "https://api.openai.com/v1/chat/completions"

    def __init__(self, api_key: str | None, model: str, timeout: float = settings.SUMMARIZER_TIMEOUT_SECONDS):
        super().__init__(timeout)
        self.api_key = api_key
        self.model = model

    def generate(self, prompt: str) -> str:
        if not self.api_key:
            raise SummaryProviderError("OpenAI API key not found. Please set OPENAI_API_KEY.")

        headers = {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}
        payload = {
            "model": self.model,
            "messages": [
                {
                    "role": "system",
                    "content": "You are a railway track-component inspector writing concise material inspection summaries.",
                },
                {"role": "user", "content": prompt},
            ],
            "max_tokens": 400,
            "temperature": 0.2,
        }
        r = requests.post(self.endpoint, headers=headers, json=payload, timeout=self.timeout)
        if r.status_code != 200:
            try:
                detail = r.json().get("error", {}).get("message", r.text)
            except ValueError:
                detail = r.text
            raise SummaryProviderError(f"OpenAI API error: {r.status_code} - {detail}")
        data = r.json()
        return data["choices"][0]["message"]["content"].strip()


class OllamaSummarizer(PromptSummarizer):
    name = "ollama"

    def __init__(self, url: str, model: str, timeout: float = settings.SUMMARIZER_TIMEOUT_SECONDS):
        super().__init__(timeout)
        self.url = url
        self.model = model

    def generate(self, prompt: str) -> str:
        payload = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {"temperature": 0.2, "num_predict": 400},
        }
        r = requests.post(self.url, json=payload, timeout=self.timeout)
        r.raise_for_status()
        return _strip_thinking(r.json().get("response", ""))


def build_summarizer(cfg: Settings = settings) -> Summarizer:
    backend = (cfg.SUMMARIZER_BACKEND or "mock").lower()
    if backend == "openai":
        summarizer: Summarizer = OpenAISummarizer(cfg.OPENAI_API_KEY, cfg.OPENAI_MODEL, cfg.SUMMARIZER_TIMEOUT_SECONDS)
    elif backend == "ollama":
        summarizer = OllamaSummarizer(cfg.OLLAMA_URL, cfg.OLLAMA_MODEL, cfg.SUMMARIZER_TIMEOUT_SECONDS)
    else:
        if backend != "mock":
            logger.warning("Unknown SUMMARIZER_BACKEND %r, falling back to mock", backend)
        summarizer = MockSummarizer(cfg.SUMMARY_DELAY_SECONDS)
    logger.info("Summarizer backend: %s", summarizer.name)
    return summarizer
