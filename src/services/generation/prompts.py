"""Prompt builders. Every prompt ends with the exact JSON layout expected back."""

from __future__ import annotations

from schemas.generate import DateContext
from services.generation.catalog import MORNING_COPY_COUNT, GenerationKind


AUDIENCES = {
    "toddler": "0-6岁幼儿及其家长，语言温柔亲切，强调陪伴与启蒙",
    "primary": "小学生及其家长和老师，关注阅读能力与学习成长",
}

QUOTE_SCENES = {
    "morning": "适合早晨问候的温暖名人名言，结合时节与阅读主题",
    "toddler": "适合0-6岁儿童的温馨教育名言，强调陪伴与启蒙",
    "primary": "适合小学生的励志名言，关注阅读能力与学习成长",
}

PICTUREBOOK_STYLES = {
    "minimalist": "没有华丽的修辞和复杂的句式，短句为主，节奏舒缓，宁静治愈",
    "childview": "从儿童视角出发，切入点小，但指向的却是人生的大命题：孤独、满足、自信、追寻",
    "philosophy": "通感与留白，文字不仅在描述动作，还在捕捉一种空气感，留下大量的空间让读者去想象画面",
    "nature": "通过描写自然（如风、山、光影）来隐喻人的内心世界或人生真理",
}

_COPIES_FORMAT = """请严格按照以下JSON格式返回，不要包含任何其他文字：
{
  "copies": ["文案1", "文案2"],
  "quote_index": -1
}
其中 quote_index 是引用了名人名言的那条文案在 copies 中的下标（从0开始），没有则为 -1。"""


def build_morning_prompt(context: DateContext) -> str:
    details = [f"季节：{context.season}"]
    if context.solar_term:
        details.append(f"节气：{context.solar_term}")
    if context.festival:
        details.append(f"节日：{context.festival}")
    details.append(f"日期：{context.formatted_date} {context.weekday}")

    return f"""作为一名专业的儿童教育内容创作者，请为{context.formatted_date}这一天创作儿童阅读主题的早安语。

背景信息：{"，".join(details)}

要求：
- 共{MORNING_COPY_COUNT}条，每条50-100字
- 语言温暖、亲切，能激发孩子和家长的阅读兴趣
- 自然融入季节、节气或节日元素

请严格按照以下JSON格式返回，不要包含任何其他文字：
{{
  "morning_copies": ["早安语1", "早安语2", "早安语3", "早安语4", "早安语5"]
}}"""


def _topic_for(kind: GenerationKind) -> str:
    if kind.type == "quote":
        return f"名人名言类阅读推广文案。场景：{QUOTE_SCENES[kind.sub_type or 'morning']}"
    if kind.type == "picturebook":
        return f"绘本风格的短文。风格：{PICTUREBOOK_STYLES[kind.sub_type or 'minimalist']}"
    return f"儿童阅读推广文案。面向：{AUDIENCES[kind.type]}"


def build_copies_prompt(kind: GenerationKind, count: int) -> str:
    return f"""作为一名专业的儿童教育内容创作者，请创作{count}条{_topic_for(kind)}。

要求：
- 每条文案独立成段，30-120字
- 内容积极正向，贴近儿童阅读与成长
- 最多只有一条文案引用名人名言，并注明出处

{_COPIES_FORMAT}"""
