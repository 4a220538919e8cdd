"""Stock imagery suggestions attached to each generated day."""

from __future__ import annotations

import uuid
from collections.abc import Sequence

from schemas.generate import DateContext, ImageOption


STOCK_IMAGE_URLS = (
    "https://images.unsplash.com/photo-1481627834876-b7833e8f5570?w=400",
    "https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?w=400",
    "https://images.unsplash.com/photo-1544716278-ca5e3f4abd8c?w=400",
    "https://images.unsplash.com/photo-1516979187457-637abb4f9353?w=400",
    "https://images.unsplash.com/photo-1503676260728-1c00da094a0b?w=400",
    "https://images.unsplash.com/photo-1606092195730-5d7b9af1efc5?w=400",
    "https://images.unsplash.com/photo-1522202176988-66273c2fd55f?w=400",
)

DEFAULT_IMAGE_KEYWORDS = ("儿童阅读", "亲子时光", "书本", "学习", "教育")
IMAGE_OPTION_COUNT = 5


def keywords_for_context(context: DateContext) -> list[str]:
    """Date-specific keywords first, then the default reading keywords."""
    keywords = context.keywords
    keywords.extend(k for k in DEFAULT_IMAGE_KEYWORDS if k not in keywords)
    return keywords


def build_image_options(
    keywords: Sequence[str], count: int = IMAGE_OPTION_COUNT
) -> list[ImageOption]:
    keywords = list(keywords) or list(DEFAULT_IMAGE_KEYWORDS)
    batch = uuid.uuid4().hex[:12]
    options = []
    for index, url in enumerate(STOCK_IMAGE_URLS[:count]):
        keyword = keywords[index % len(keywords)]
        options.append(
            ImageOption(
                id=f"img_{batch}_{index}",
                url=url,
                title=f"{keyword}主题配图",
                description=f"适合{keyword}的儿童阅读场景",
            )
        )
    return options
