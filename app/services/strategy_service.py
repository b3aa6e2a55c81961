"""Brand strategy generation backed by the OpenAI chat completion API."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional, TypedDict

from openai import APIStatusError

from app.config.openai_client import ClientFactory, build_openai_client
from app.schemas import StoreProfile

logger = logging.getLogger(__name__)

STRATEGY_MODEL = "gpt-4.1-mini"
STRATEGY_TEMPERATURE = 0.7

SYSTEM_PROMPT = """
あなたは、飲食店特化のSNSクリエイティブディレクターです。
広告代理店やSNS運用代行会社がクライアントに見せる
「ブランド戦略エグゼクティブサマリ」を作成します。

出力は必ず次のJSON形式「だけ」で返してください。余計な文章は一切書かないでください。

{
  "overview": "ブランド全体像。どのポジションを取りにいくかを1〜3文で。",
  "targetInsight": "ターゲットのライフスタイル・価値観・行動インサイトを2〜4文で。",
  "strength": "店舗の強みを箇条書きベースで3〜6行。",
  "coreMessage": "SNS上で一貫して伝えていくコアメッセージ（1〜2文）。キャッチコピー的でも良い。",
  "objective": "短期・中期・長期の目的をそれぞれ1〜2行で。",
  "contentStrategy": "どのような投稿カテゴリを、どの役割で出していくか（3〜6行）。",
  "visualGuide": "色味・明るさ・構図・写真のテイストなどのビジュアルルール（3〜6行）。"
}

日本語で書いてください。
店舗のカテゴリやコンセプトに応じて、
和食・イタリアン・カフェなどでトーンやビジュアルガイドがズレないように調整してください。
""".strip()

USER_PROMPT_TEMPLATE = """
店舗名: {store_name}
カテゴリ: {category}
ターゲット: {target}
インスタ運用の目的: {goal}
コンセプト・雰囲気: {concept}
看板メニュー・コース内容: {menu_text}
追加情報・メモ: {free_note}

上記を踏まえて、この店舗に最適化されたブランド戦略エグゼクティブサマリを作成してください。
出力は必ず、指定したJSONだけにしてください。"""


class ChatMessage(TypedDict):
    role: str
    content: str


class StrategyGenerationError(Exception):
    """Base error for failures while producing a brand strategy."""


class UpstreamAPIError(StrategyGenerationError):
    """OpenAI answered with a non-success status."""

    def __init__(self, detail: str, status_code: Optional[int] = None) -> None:
        super().__init__(f"OpenAI API error ({status_code}): {detail}")
        self.detail = detail
        self.status_code = status_code


class StrategyParseError(StrategyGenerationError):
    """The model reply was not valid JSON."""

    def __init__(self, content: str) -> None:
        super().__init__("Failed to parse JSON from OpenAI")
        self.content = content


def build_system_prompt() -> str:
    return SYSTEM_PROMPT


def build_user_prompt(profile: StoreProfile) -> str:
    """Render the resolved store profile into the labelled user prompt."""

    return USER_PROMPT_TEMPLATE.format(
        store_name=profile.store_name,
        category=profile.category,
        target=profile.target,
        goal=profile.goal,
        concept=profile.concept,
        menu_text=profile.menu_text,
        free_note=profile.free_note,
    ).strip()


def build_messages(profile: StoreProfile) -> List[ChatMessage]:
    return [
        {"role": "system", "content": build_system_prompt()},
        {"role": "user", "content": build_user_prompt(profile)},
    ]


def extract_message_content(data: Any) -> str:
    """Return the stripped content of the first choice, or an empty string."""

    if not isinstance(data, dict):
        return ""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str):
        return ""
    return content.strip()


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def parse_strategy_content(content: str) -> Any:
    try:
        return json.loads(content, parse_constant=_reject_constant)
    except ValueError as exc:
        logger.error("Failed to parse JSON from OpenAI: %s", content)
        raise StrategyParseError(content) from exc


def _request_strategy_content(
    api_key: str,
    messages: List[ChatMessage],
    client_factory: ClientFactory,
) -> str:
    with client_factory(api_key) as client:
        try:
            raw = client.chat.completions.with_raw_response.create(
                model=STRATEGY_MODEL,
                messages=messages,
                temperature=STRATEGY_TEMPERATURE,
            )
        except APIStatusError as exc:
            detail = exc.response.text
            logger.error("OpenAI API error: %s", detail)
            raise UpstreamAPIError(detail, status_code=exc.status_code) from exc
        data: Dict[str, Any] = raw.http_response.json()
    return extract_message_content(data)


async def generate_brand_strategy(
    profile: StoreProfile,
    *,
    api_key: str,
    client_factory: ClientFactory = build_openai_client,
) -> Any:
    """Call OpenAI once and return the parsed brand strategy JSON.

    Raises UpstreamAPIError when OpenAI rejects the request and
    StrategyParseError when the reply is not JSON. Transport failures
    propagate unchanged.
    """
    messages = build_messages(profile)
    content = await asyncio.to_thread(_request_strategy_content, api_key, messages, client_factory)
    return parse_strategy_content(content)


__all__ = [
    "STRATEGY_MODEL",
    "STRATEGY_TEMPERATURE",
    "StrategyGenerationError",
    "StrategyParseError",
    "UpstreamAPIError",
    "build_messages",
    "build_system_prompt",
    "build_user_prompt",
    "extract_message_content",
    "generate_brand_strategy",
    "parse_strategy_content",
]
