"""HTTP client for the external text-generation service behind AI spending summaries"""

import json
import logging
import re
import httpx
from typing import Any, Dict, List, Optional
from dominion_gateway.config import settings
from dominion_gateway.domain.exceptions import (
    InsightAuthorizationError,
    InsightNotConfiguredError,
    InsightRateLimitError,
    InsightResponseError,
    InsightServiceError,
    InsightUnavailableError,
)
from dominion_gateway.domain.models import FinancialSnapshot, SpendingSummary, Trend
from dominion_gateway.infrastructure.observability.metrics import insights_latency_histogram

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a JSON-only financial analysis API. Always respond with valid JSON only, "
    "no markdown formatting, no explanatory text before or after the JSON."
)

# Only the most recent expenses are listed in the prompt
PROMPT_EXPENSE_LIMIT = 15

# Single purchases in SHOPPING above this amount get a necessity-vs-wants hint
LARGE_SHOPPING_AMOUNT = 1000

CODE_BLOCK_PATTERN = re.compile(r"```(?:json)?\s*([\s\S]*?)```")
JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


def _money(value) -> str:
    return f"R {value:,.2f}"


def build_prompt(snapshot: FinancialSnapshot) -> str:
    """Render the snapshot as the analysis prompt"""
    if snapshot.global_budget is not None:
        pct = round(float(snapshot.total_expenses / snapshot.global_budget * 100))
        budget_status = f"{_money(snapshot.total_expenses)} of {_money(snapshot.global_budget)} ({pct}%"
        budget_status += " - OVER BUDGET!)" if snapshot.over_global_budget else ")"
    else:
        budget_status = "Not set"

    people = []
    for budget in snapshot.person_budgets:
        if budget.budget_limit is not None:
            line = f"- {budget.name}: {_money(budget.spent)} of {_money(budget.budget_limit)} ({budget.percent_used}%"
            line += " - OVER BUDGET!)" if budget.over_budget else ")"
        else:
            line = f"- {budget.name}: {_money(budget.spent)} spent (no budget set)"
        people.append(line)

    obligations = [
        f"- {o.name} ({o.category.value}{', Essential' if o.is_uncompromised else ''}): {_money(o.amount)}"
        for o in snapshot.obligations
    ]
    expenses = []
    for e in snapshot.expenses[:PROMPT_EXPENSE_LIMIT]:
        person = snapshot.person_names.get(e.person_id) if e.person_id else None
        suffix = f", for {person}" if person else ""
        expenses.append(f"- {e.name or e.category.label} ({e.category.value}{suffix}): {_money(e.amount)}")
    incomes = [
        f"- {i.name or i.source.value} ({i.source.value}{', Recurring' if i.is_recurring else ''}): {_money(i.amount)}"
        for i in snapshot.incomes
    ]

    context = []
    if snapshot.over_global_budget:
        context.append("The family is OVER their global budget! Focus on cost-cutting advice.")
    if snapshot.any_person_over_budget:
        context.append("Some family members are over their individual budgets! Address this specifically.")
    if snapshot.free_cash_flow < 0:
        context.append("NEGATIVE free cash flow! This is urgent - provide debt avoidance strategies.")
    if any(e.category.value == "SHOPPING" and e.amount > LARGE_SHOPPING_AMOUNT for e in snapshot.expenses):
        context.append("Large shopping purchases detected - advise on necessity vs wants.")

    sections = [
        "You are a personal finance advisor for a South African family. "
        "Analyze this financial data and provide insights.",
        "FINANCIAL PROFILE:\n"
        f"- Monthly Salary: {_money(snapshot.monthly_income)}\n"
        f"- Extra Income This Month: {_money(snapshot.total_extra_income)}\n"
        f"- Total Income: {_money(snapshot.total_income)}\n"
        f"- Fixed Obligations: {_money(snapshot.total_obligations)}\n"
        f"- Variable Expenses: {_money(snapshot.total_expenses)}\n"
        f"- Free Cash Flow: {_money(snapshot.free_cash_flow)}\n"
        f"- Savings Rate: {snapshot.savings_rate:.1f}%",
        f"BUDGET STATUS:\n- Global Monthly Budget: {budget_status}",
        "FAMILY MEMBER BUDGETS:\n" + ("\n".join(people) or "No family members tracked"),
        "OBLIGATIONS:\n" + ("\n".join(obligations) or "No obligations set up"),
        "RECENT EXPENSES (This Month):\n" + ("\n".join(expenses) or "No expenses recorded"),
        "EXTRA INCOME (This Month):\n" + ("\n".join(incomes) or "No extra income recorded"),
        "IMPORTANT CONTEXT:\n" + "\n".join(context),
        "Respond with a JSON object in this exact format:\n"
        "{\n"
        '  "summary": "A brief 1-2 sentence overview focusing on budget status and any concerns",\n'
        '  "highlights": ["observation 1", "observation 2", "observation 3"],\n'
        '  "recommendations": ["recommendation 1", "recommendation 2", "recommendation 3"],\n'
        '  "trend": "improving"\n'
        "}\n\n"
        'The "trend" field must be exactly one of: "improving", "stable", or "concerning".',
        "Be encouraging but HONEST. If someone is over budget, say so clearly.",
    ]
    return "\n\n".join(sections)


def extract_json(text: str) -> Dict[str, Any]:
    """
    Pull the JSON object out of a model reply.

    Tolerates ```json fences and preamble text around the object.

    Raises:
        InsightResponseError: no parseable JSON object in the reply
    """
    candidate = text.strip()
    fenced = CODE_BLOCK_PATTERN.search(candidate)
    if fenced:
        candidate = fenced.group(1).strip()
    obj = JSON_OBJECT_PATTERN.search(candidate)
    if obj:
        candidate = obj.group(0)

    try:
        data = json.loads(candidate)
    except ValueError as e:
        raise InsightResponseError(f"Insight reply is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise InsightResponseError("Insight reply is not a JSON object")
    return data


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def parse_summary(text: str) -> SpendingSummary:
    """Model reply → SpendingSummary; unknown trend values become 'stable'"""
    data = extract_json(text)
    try:
        trend = Trend(data.get("trend"))
    except ValueError:
        trend = Trend.STABLE

    summary = data.get("summary")
    return SpendingSummary(
        summary=summary if isinstance(summary, str) and summary else "Unable to generate summary",
        highlights=_string_list(data.get("highlights")),
        recommendations=_string_list(data.get("recommendations")),
        trend=trend,
    )


class InsightClient:
    """Client for the external messages API that writes spending summaries"""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.insights_api_base).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.insights_api_key
        self.timeout = timeout or settings.http_timeout_seconds
        self.model = settings.insights_model
        self.max_tokens = settings.insights_max_tokens
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "x-api-key": self.api_key,
            "anthropic-version": settings.insights_api_version,
            "content-type": "application/json",
        }

    async def generate_summary(self, snapshot: FinancialSnapshot) -> SpendingSummary:
        """
        Ask the service for a narrative summary of the snapshot.

        Raises:
            InsightNotConfiguredError: no API key
            InsightAuthorizationError: 401/403
            InsightRateLimitError: 429
            InsightUnavailableError: timeout, network failure, 5xx/529
            InsightResponseError: reply without a usable JSON object
            InsightServiceError: any other HTTP error
        """
        if not self.api_key:
            raise InsightNotConfiguredError("Insight service API key is not configured")

        payload = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "system": SYSTEM_PROMPT,
            "messages": [{"role": "user", "content": build_prompt(snapshot)}],
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with insights_latency_histogram.time():
                    response = await client.post(
                        f"{self.base_url}/v1/messages",
                        headers=self._headers(),
                        json=payload,
                    )
                response.raise_for_status()
                body = response.json()
            except httpx.TimeoutException as e:
                raise InsightUnavailableError(f"Insight service timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise self._status_error(e.response.status_code) from e
            except httpx.RequestError as e:
                raise InsightUnavailableError(f"Insight service unreachable: {e}") from e
            except ValueError as e:
                raise InsightResponseError(f"Insight service returned non-JSON body: {e}") from e

        text = self._reply_text(body)
        logger.debug("Insight service reply received", extra={"reply_length": len(text)})
        return parse_summary(text)

    @staticmethod
    def _status_error(status_code: int) -> InsightServiceError:
        if status_code in (401, 403):
            return InsightAuthorizationError(f"Insight service rejected credentials: {status_code}")
        if status_code == 429:
            return InsightRateLimitError("Insight service rate limit exceeded")
        if status_code >= 500:
            return InsightUnavailableError(f"Insight service unavailable: {status_code}")
        return InsightServiceError(f"Insight service error: {status_code}")

    @staticmethod
    def _reply_text(body: Any) -> str:
        try:
            blocks = body["content"]
            return next(
                block["text"] for block in blocks if isinstance(block, dict) and block.get("type") == "text"
            )
        except (KeyError, TypeError, StopIteration) as e:
            raise InsightResponseError("No text block in insight service reply") from e
