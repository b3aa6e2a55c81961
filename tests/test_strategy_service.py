import pytest
from pydantic import ValidationError

from app.schemas import StoreProfile
from app.services.strategy_service import (
    StrategyParseError,
    build_messages,
    build_user_prompt,
    extract_message_content,
    parse_strategy_content,
)


def test_store_profile_defaults_for_missing_fields() -> None:
    profile = StoreProfile.model_validate({})

    assert profile.store_name == "本日のお店"
    assert profile.category == "飲食店"
    assert profile.target == "想定しているお客様"
    assert profile.goal == "来店数の増加"
    assert profile.concept == "お店の世界観"
    assert profile.menu_text == ""
    assert profile.free_note == ""


@pytest.mark.parametrize("falsy", ["", 0, False, None, [], {}])
def test_store_profile_falsy_values_fall_back_to_default(falsy) -> None:
    profile = StoreProfile.model_validate({"storeName": falsy, "goal": falsy})

    assert profile.store_name == "本日のお店"
    assert profile.goal == "来店数の増加"


def test_store_profile_reads_camel_case_keys_and_ignores_unknown() -> None:
    profile = StoreProfile.model_validate(
        {
            "storeName": "鮨 たけ",
            "menuText": "おまかせコース",
            "freeNote": "カウンター8席",
            "unexpected": "ignored",
        }
    )

    assert profile.store_name == "鮨 たけ"
    assert profile.menu_text == "おまかせコース"
    assert profile.free_note == "カウンター8席"


def test_store_profile_stringifies_non_string_values() -> None:
    profile = StoreProfile.model_validate({"target": 30, "concept": True, "freeNote": ["テラス", "禁煙"]})

    assert profile.target == "30"
    assert profile.concept == "true"
    assert profile.free_note == '["テラス", "禁煙"]'


@pytest.mark.parametrize("payload", [[1, 2], "x", 5, True])
def test_store_profile_from_non_object_payload_uses_defaults(payload) -> None:
    assert StoreProfile.model_validate(payload) == StoreProfile()


def test_store_profile_rejects_null_payload() -> None:
    with pytest.raises(ValidationError):
        StoreProfile.model_validate(None)


def test_store_profile_keeps_whitespace_only_values() -> None:
    profile = StoreProfile.model_validate({"category": "  "})
    assert profile.category == "  "


def test_user_prompt_layout() -> None:
    profile = StoreProfile.model_validate(
        {
            "storeName": "Cafe Nami",
            "category": "カフェ",
            "target": "近隣の大学生",
            "goal": "認知拡大",
            "concept": "海辺の隠れ家",
            "menuText": "自家焙煎コーヒー",
            "freeNote": "夜はバー営業",
        }
    )

    assert build_user_prompt(profile).splitlines() == [
        "店舗名: Cafe Nami",
        "カテゴリ: カフェ",
        "ターゲット: 近隣の大学生",
        "インスタ運用の目的: 認知拡大",
        "コンセプト・雰囲気: 海辺の隠れ家",
        "看板メニュー・コース内容: 自家焙煎コーヒー",
        "追加情報・メモ: 夜はバー営業",
        "",
        "上記を踏まえて、この店舗に最適化されたブランド戦略エグゼクティブサマリを作成してください。",
        "出力は必ず、指定したJSONだけにしてください。",
    ]


def test_system_prompt_lists_every_strategy_key() -> None:
    system, user = build_messages(StoreProfile())

    assert system["role"] == "system"
    assert user["role"] == "user"
    assert system["content"] == system["content"].strip()
    for key in (
        "overview",
        "targetInsight",
        "strength",
        "coreMessage",
        "objective",
        "contentStrategy",
        "visualGuide",
    ):
        assert f'"{key}"' in system["content"]


@pytest.mark.parametrize(
    "data",
    [
        None,
        {},
        {"choices": []},
        {"choices": [{}]},
        {"choices": [{"message": None}]},
        {"choices": [{"message": {"content": None}}]},
        {"choices": ["unexpected"]},
    ],
)
def test_extract_message_content_defaults_to_empty(data) -> None:
    assert extract_message_content(data) == ""


def test_extract_message_content_strips_whitespace() -> None:
    data = {"choices": [{"message": {"content": '\n  {"overview": "x"}  \n'}}]}
    assert extract_message_content(data) == '{"overview": "x"}'


def test_parse_strategy_content_keeps_unexpected_shapes() -> None:
    assert parse_strategy_content('{"overview": "only one key"}') == {"overview": "only one key"}


def test_parse_strategy_content_raises_with_raw_content() -> None:
    with pytest.raises(StrategyParseError) as excinfo:
        parse_strategy_content("```json\n{}\n```")

    assert excinfo.value.content == "```json\n{}\n```"


@pytest.mark.parametrize("content", ["NaN", "-Infinity", '{"overview": Infinity}'])
def test_parse_strategy_content_rejects_non_standard_constants(content: str) -> None:
    with pytest.raises(StrategyParseError):
        parse_strategy_content(content)
