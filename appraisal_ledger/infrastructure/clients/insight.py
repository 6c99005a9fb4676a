"""Generative-text API client for dashboard insights"""

import httpx
from appraisal_ledger.domain.models import InsightRequest
from appraisal_ledger.domain.exceptions import InsightAPIError
from appraisal_ledger.domain.insights import build_prompt
from appraisal_ledger.config import settings
from appraisal_ledger.infrastructure.observability.metrics import insight_latency_histogram


class InsightClient:
    """Client for the Gemini generateContent REST endpoint"""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.insight_api_base
        self.api_key = api_key if api_key is not None else settings.insight_api_key
        self.model = model or settings.insight_model
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def summarize(self, request: InsightRequest) -> str:
        """
        Ask the model for a 2-3 sentence workload summary.

        Returns the generated text, possibly empty.

        Raises:
            InsightAPIError: On missing key, timeout, HTTP errors, or invalid response
        """
        if not self.api_key:
            raise InsightAPIError("Insight API key is not configured")

        payload = {
            "contents": [{"parts": [{"text": build_prompt(request)}]}],
            "generationConfig": {"thinkingConfig": {"thinkingBudget": 0}},
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with insight_latency_histogram.time():
                    response = await client.post(
                        f"{self.base_url}/models/{self.model}:generateContent",
                        headers={"x-goog-api-key": self.api_key},
                        json=payload,
                    )
                response.raise_for_status()
                data = response.json()

                parts = data["candidates"][0]["content"]["parts"]
                return "".join(part.get("text", "") for part in parts).strip()

            except httpx.TimeoutException as e:
                raise InsightAPIError(f"Insight API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise InsightAPIError(f"Insight API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise InsightAPIError(f"Insight API unreachable: {e}") from e
            except (KeyError, IndexError, ValueError, TypeError) as e:
                raise InsightAPIError(f"Invalid response from insight API: {e}") from e
