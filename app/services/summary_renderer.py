# app/services/summary_renderer.py
"""
Render a Chinese-language digest of one 8-K filing
"""
import re
from typing import List

from app.schemas.eightk import ExtractedItem, FilingReference, FilingSummary

SUMMARY_TAGS = ["#美股观察", "#SEC8K", "#重大事项", "#投研速递", "#公司公告解析"]

NO_ITEMS_LINE = "• 本次 8-K 未识别到典型条款标题，建议点原文查看全文。"

GUIDANCE_LINES = [
    "1) 优先关注 2.02（业绩）、2.03（融资/债务）、5.02（管理层变动）、5.07（投票结果）、8.01（其他重大事项）。",
    "2) 与 10-Q/10-K/Investor Presentation 交叉验证，避免只看摘要。",
    "3) 这不是投资建议，信息以 SEC 原文为准。",
]

SNIPPET_PREVIEW_CHARS = 60

_WHITESPACE = re.compile(r"\s+")


def render_item_line(item: ExtractedItem) -> str:
    """• Item 2.02（经营业绩/财务信息）：Results of Operations…"""
    text = _WHITESPACE.sub(" ", item.title_guess) if item.title_guess else ""
    if not text:
        text = item.snippet[:SNIPPET_PREVIEW_CHARS]
    return f"• Item {item.code}（{item.label}）：{text}…"


def render_summary(
    symbol: str,
    filing: FilingReference,
    items: List[ExtractedItem],
    days: int,
) -> FilingSummary:
    title = f"【{symbol}】8-K 重大事项速览（{filing.filing_date}）"
    item_lines = "\n".join(render_item_line(item) for item in items) or NO_ITEMS_LINE

    body = "\n".join([
        title,
        "",
        f"官方 8-K 披露（近 {days} 天）要点：",
        item_lines,
        "",
        "解读建议：",
        *GUIDANCE_LINES,
        "",
        f"原文：{filing.doc_url}",
        "",
        " ".join(SUMMARY_TAGS),
    ])
    return FilingSummary(title=title, body=body)
