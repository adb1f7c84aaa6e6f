"""
Figma 圖層 id 指令解析

Figma 匯出 SVG 時會把圖層名稱寫進 id，例如：

    $fill(topMenuHeadingIconColor, backgroundColor)

符合此格式的節點會在 template 改寫時轉成 Angular 屬性綁定。
"""

import re
from dataclasses import dataclass
from typing import Optional

# 可被改寫的屬性；ID pattern 由此產生，新增 stroke 只需改這裡
SUPPORTED_TARGETS = ("fill",)

ID_PATTERN = re.compile(
    r"^\$(" + "|".join(SUPPORTED_TARGETS) + r")\(([a-zA-Z0-9\s,]+)\)"
)


@dataclass(frozen=True)
class Instruction:
    target: str
    args: tuple

    def with_fallback(self, value: str) -> "Instruction":
        """回傳在 args 尾端加上 fallback 值的新 Instruction。"""
        return Instruction(self.target, self.args + (value,))


def parse_id(identifier: str) -> Optional[Instruction]:
    """解析節點 id；不符合 `$fill(...)` 格式時回傳 None。

    只比對字串開頭，`)` 之後的字元會被忽略。
    """
    match = ID_PATTERN.match(identifier)
    if not match:
        return None
    args = re.sub(r"\s", "", match.group(2)).split(",")
    return Instruction(target=match.group(1), args=tuple(args))
