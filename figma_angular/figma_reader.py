"""
Figma REST API 讀取

讀取 Figma 檔案節點樹、依類型擷取節點，並下載 component 的 SVG 匯出。
"""

from typing import Dict, Iterable, List, Optional

import requests


class FigmaExportError(Exception):
    """Figma images API 回傳 err 欄位時拋出."""


class FigmaAPIClient:
    """Figma REST API 唯讀封裝."""

    BASE_URL = "https://api.figma.com/v1"

    def __init__(self, token: str):
        self.token = token
        self.session = requests.Session()
        self.session.headers.update({
            "X-Figma-Token": token,
            "Content-Type": "application/json",
        })

    def get_file(self, file_key: str) -> dict:
        url = f"{self.BASE_URL}/files/{file_key}"
        resp = self.session.get(url)
        resp.raise_for_status()
        return resp.json()

    def get_images(self, file_key: str, node_ids: list) -> dict:
        """SVG 匯出；圖層名稱需保留為 id，$fill(...) 指令才會出現在 SVG 內."""
        url = f"{self.BASE_URL}/images/{file_key}"
        params = {"ids": ",".join(node_ids), "format": "svg", "svg_include_id": "true"}
        resp = self.session.get(url, params=params)
        resp.raise_for_status()
        return resp.json()

    def get_text(self, url: str) -> str:
        """下載 images API 回傳的匯出檔（S3 連結）."""
        # S3 不是 Figma 主機，不可帶 X-Figma-Token
        resp = requests.get(url)
        resp.raise_for_status()
        return resp.text


class FigmaDocument:
    """A fetched Figma file: node tree access plus SVG downloads."""

    def __init__(self, file_id: str, data: dict, client: FigmaAPIClient):
        self.file_id = file_id
        self.data = data
        self.client = client

    @classmethod
    def load(
        cls,
        file_id: str,
        access_token: str,
        client: Optional[FigmaAPIClient] = None,
    ) -> "FigmaDocument":
        client = client or FigmaAPIClient(access_token)
        return cls(file_id, client.get_file(file_id), client)

    @property
    def root(self) -> dict:
        return self.data.get("document", {})

    @property
    def name(self) -> str:
        return self.data.get("name", "")

    def extract(self, roots: Iterable[dict], node_type: str) -> List[dict]:
        """依文件順序（深度優先）回傳 roots 底下所有指定類型的節點，含 roots 本身."""
        result: List[dict] = []
        for root in roots:
            _collect_nodes(root, node_type, result)
        return result

    def download(self, components: List[dict]) -> Dict[str, str]:
        """Download SVG exports, keyed by component name.

        Components whose render URL is null are left out. When two
        components share a name the first one wins.
        """
        if not components:
            return {}
        node_ids = list(dict.fromkeys(c["id"] for c in components))
        payload = self.client.get_images(self.file_id, node_ids)
        if payload.get("err"):
            raise FigmaExportError(f"Figma export failed: {payload['err']}")
        images = payload.get("images") or {}

        svgs: Dict[str, str] = {}
        seen = set()
        for component in components:
            name = component.get("name", "")
            if name in seen:
                continue
            seen.add(name)
            url = images.get(component["id"])
            if not url:
                continue
            svgs[name] = self.client.get_text(url)
        return svgs


def _collect_nodes(node: dict, node_type: str, result: List[dict]) -> None:
    if not node:
        return
    if node.get("type") == node_type:
        result.append(node)
    for child in node.get("children", []):
        _collect_nodes(child, node_type, result)
