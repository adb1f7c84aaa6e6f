#!/usr/bin/env python3
"""
figma-angular CLI — Figma component → Angular component template

  python -m figma_angular.cli component components.json            # 使用 FIGMA_ACCESS_TOKEN
  python -m figma_angular.cli component components.json -a TOKEN -v
"""

import argparse
import sys
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Optional

import requests

from figma_angular import __version__

from .config import ComponentError, load_components_json, load_config, resolve_access_token
from .figma_reader import FigmaAPIClient, FigmaDocument, FigmaExportError
from .template import render_template

MISSING_TOKEN_MESSAGE = (
    "Missing Figma personal access token. "
    "Please provide via --access-token or FIGMA_ACCESS_TOKEN environment variable."
)


def _log(message: str, verbose: bool = True) -> None:
    if not verbose:
        return
    print(f"~> {message}")


def find_by_name(nodes: List[dict], name: str) -> Optional[dict]:
    """名稱完全相符的第一個節點."""
    return next((node for node in nodes if node.get("name") == name), None)


def generate_components(
    input_path: str,
    access_token: Optional[str],
    verbose: bool = False,
    client: Optional[FigmaAPIClient] = None,
) -> List[str]:
    """Fetch the document once, then write one template per mapping.

    Raises ComponentError on the first failing mapping; templates written
    before it stay on disk.
    """
    if not access_token:
        raise ComponentError(MISSING_TOKEN_MESSAGE)
    components_json = load_components_json(input_path)
    file_id = components_json["fileId"]
    page_name = components_json["pageName"]

    _log(f"loading Figma document '{file_id}'", verbose)
    document = FigmaDocument.load(file_id, access_token, client=client)
    _log(f"loaded Figma document '{document.name}'", verbose)
    page = find_by_name(document.extract([document.root], "CANVAS"), page_name)
    if not page:
        raise ComponentError(f"Page '{page_name}' doesn't exist")

    components = document.extract([page], "COMPONENT")
    _log(f"found {len(components)} components on page '{page_name}'", verbose)
    svgs = document.download(components)

    written = []
    for mapping in components_json["mappings"]:
        component = find_by_name(components, mapping["name"])
        if not component:
            raise ComponentError(f"Component '{mapping['name']}' doesn't exist")
        svg = svgs.get(component["name"])
        if not svg:
            raise ComponentError(f"No SVG export found for '{component['name']}'")

        try:
            template = render_template(svg)
        except ET.ParseError as e:
            raise ComponentError(f"Invalid SVG export for '{component['name']}': {e}")

        output = Path(mapping["output"])
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(template, encoding="utf-8")
        written.append(str(output))
        _log(f"generated {output}", verbose)
    return written


def cmd_component(args, config: dict) -> Optional[str]:
    """Component: Figma SVG → Angular template；失敗時回傳錯誤訊息."""
    token = resolve_access_token(args.access_token, config)
    try:
        generate_components(args.input, token, verbose=args.verbose)
    except (ComponentError, FigmaExportError) as e:
        return str(e)
    except requests.HTTPError as e:
        status = getattr(e.response, "status_code", None)
        if status == 403:
            return "Figma API 403: token is invalid or expired, please create a new personal access token."
        if status == 404:
            return "Figma API 404: document not found, please check 'fileId' in the components JSON."
        return f"Figma API error: {e}"
    except requests.RequestException as e:
        return f"Figma API error: {e}"
    return None


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="figma-angular: Figma components → Angular component templates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", "-c", default="figma-angular.config.json", help="Config path")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    component_p = sub.add_parser("component", help="Generate Angular Component Template from figma SVG",
        epilog="Examples:\n  figma-angular component components.json\n  figma-angular component components.json -a TOKEN --verbose",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    component_p.add_argument("input", help="path to components.json")
    component_p.add_argument("--access-token", "-a", help="Figma personal access token (default: $FIGMA_ACCESS_TOKEN)")
    component_p.add_argument("--verbose", "-v", action="store_true", help="verbose")

    args = parser.parse_args(argv)
    config = load_config(args.config)

    if args.command == "component":
        message = cmd_component(args, config)
        if message:
            print(f"❌ {message}")
            sys.exit(1)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
