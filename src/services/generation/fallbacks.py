"""Canned copy served when a morning item's generated text cannot be parsed."""

from __future__ import annotations

from services.generation.shapes import FixedArrayOfN, FixedArrayResult


MORNING_FALLBACK_COPIES = (
    "早安！在这个特别的日子里，让我们一起翻开书页，感受知识的魅力。每一个故事都是一扇通往奇妙世界的门。",
    "早上好，亲爱的孩子们！每一次阅读都是一次心灵的旅行，今天也和书本做好朋友吧。",
    "新的一天从阅读开始。扩展词汇、理解世界、学会思考，书页里藏着成长的力量。",
    "早安！今天试着陪孩子安静地读上15分钟，读完聊一聊故事里最喜欢的角色。",
    "阳光正好，书香正浓。愿每个孩子都在故事里找到勇气、好奇和温柔。",
)


def morning_fallback(shape: FixedArrayOfN) -> FixedArrayResult:
    """Build the fallback through the same validation as generated output."""
    return shape.validate({shape.field: list(MORNING_FALLBACK_COPIES)})
