# app/services/text_extractor.py
"""
Text Extractor Service - 8-K Item extraction

把 8-K 原文 HTML 转成纯文本，再按 "Item 2.02 ..." 标题抽取条款：
1. html_to_text: 正则清洗，不做严格 HTML 解析，坏标签只影响输出质量不报错
2. extract_items: 按条款编号去重（同一文档内首次出现为准），截取标题与后文片段
3. item_label: 有序前缀规则，多段编号（如 5.02）必须先于单数字兜底（如 5）
"""
import re
from typing import List, Tuple
import logging

from app.schemas.eightk import ExtractedItem

logger = logging.getLogger(__name__)

# HTML cleanup patterns, applied in order
SCRIPT_PATTERN = re.compile(r"<script[\s\S]*?</script>", re.IGNORECASE)
STYLE_PATTERN = re.compile(r"<style[\s\S]*?</style>", re.IGNORECASE)
LINE_BREAK_PATTERN = re.compile(r"<br\s*/?>|</p>|</div>|</li>", re.IGNORECASE)
TAG_PATTERN = re.compile(r"<[^>]+>")
TRAILING_SPACE_PATTERN = re.compile(r"[ \t]+\n")
BLANK_LINES_PATTERN = re.compile(r"\n{3,}")

# "Item 2.02: Results of Operations ..." -> code, same-line title guess
ITEM_PATTERN = re.compile(r"item\s+(\d+(?:\.\d+)?)[\s:\-–—]*([^\n]{0,120})", re.IGNORECASE)

SNIPPET_MAX_CHARS = 800
SNIPPET_MAX_LINES = 8

# Evaluated top to bottom, first prefix match wins
ITEM_LABEL_RULES: Tuple[Tuple[str, str], ...] = (
    ("2.02", "经营业绩/财务信息"),
    ("2.03", "重大负债/融资安排"),
    ("2.05", "减值与重组"),
    ("5.02", "关键高管/董事变动"),
    ("5.07", "股东大会/投票结果"),
    ("8.01", "其他重大事项"),
    ("7.01", "Reg FD 披露"),
    ("9.01", "财务报表/附件"),
    ("1", "注册/报告事项"),
    ("3", "证券与市场"),
    ("4", "会计与财务"),
    ("5", "治理与其他"),
)
DEFAULT_ITEM_LABEL = "其他条款"


class TextExtractor:
    """
    Extract plain text and Item sections from 8-K filing documents

    Stateless: every method is a pure function of its arguments, so one
    instance can be shared freely.
    """

    def __init__(self):
        self.snippet_max_chars = SNIPPET_MAX_CHARS
        self.snippet_max_lines = SNIPPET_MAX_LINES

    def html_to_text(self, html: str) -> str:
        """
        Convert filing HTML to plain text suitable for pattern scanning
        """
        html = SCRIPT_PATTERN.sub("", html)
        html = STYLE_PATTERN.sub("", html)
        html = LINE_BREAK_PATTERN.sub("\n", html)
        text = TAG_PATTERN.sub("", html)
        return self._clean_text(text)

    def _clean_text(self, text: str) -> str:
        text = text.replace("\u00a0", " ")
        text = TRAILING_SPACE_PATTERN.sub("\n", text)
        text = BLANK_LINES_PATTERN.sub("\n\n", text)  # Reduce multiple newlines
        return text.strip()

    @staticmethod
    def item_label(code: str) -> str:
        """Map an item code such as "5.02" to its display label"""
        code = str(code)
        for prefix, label in ITEM_LABEL_RULES:
            if code.startswith(prefix):
                return label
        return DEFAULT_ITEM_LABEL

    def extract_items(self, text: str) -> List[ExtractedItem]:
        """
        Find "Item N.NN" headings in plain text

        Returns:
            One ExtractedItem per distinct code, in order of first occurrence.
            An empty list when the text has no headings.
        """
        items = []
        seen = set()

        for match in ITEM_PATTERN.finditer(text):
            code = (match.group(1) or "").strip()
            if not code or code in seen:
                continue
            seen.add(code)

            items.append(ExtractedItem(
                code=code,
                title_guess=(match.group(2) or "").strip(),
                label=self.item_label(code),
                snippet=self._snippet(text, match.start()),
            ))

        logger.debug(f"Found {len(items)} unique Item headings")
        return items

    def _snippet(self, text: str, start: int) -> str:
        window = text[start:start + self.snippet_max_chars]
        return "\n".join(window.split("\n")[:self.snippet_max_lines]).strip()


# Create singleton instance
text_extractor = TextExtractor()
