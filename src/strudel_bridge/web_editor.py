"""Editor surface strategies: the CodeMirror view, or a raw textarea fallback."""

from __future__ import annotations

import json
from typing import Any

from strudel_bridge.constants import EDITOR_VIEW_SELECTORS, TEXTAREA_SELECTOR
from strudel_bridge.errors import EditorNotFoundError

_VIEW_LOOKUP = """
  const findView = () => {
    for (const selector of __VIEW_SELECTORS__) {
      const view = document.querySelector(selector)?.cmView?.view;
      if (view) return view;
    }
    return null;
  };
""".replace("__VIEW_SELECTORS__", json.dumps(list(EDITOR_VIEW_SELECTORS)))

DETECT_EDITOR_SCRIPT = (
    "() => {"
    + _VIEW_LOOKUP
    + f"""
  if (findView()) return 'codemirror';
  if (document.querySelector({json.dumps(TEXTAREA_SELECTOR)})) return 'textarea';
  return '';
}}"""
)

VIEW_REPLACE_SCRIPT = (
    "(code) => {"
    + _VIEW_LOOKUP
    + """
  const view = findView();
  if (!view) throw new Error('Editor view not found');
  view.dispatch({ changes: { from: 0, to: view.state.doc.length, insert: code } });
}"""
)

VIEW_READ_SCRIPT = (
    "() => {"
    + _VIEW_LOOKUP
    + """
  const view = findView();
  return view ? view.state.doc.toString() : '';
}"""
)

TEXTAREA_REPLACE_SCRIPT = f"""(code) => {{
  const el = document.querySelector({json.dumps(TEXTAREA_SELECTOR)});
  if (!el) throw new Error('Editor textarea not found');
  el.value = code;
  el.dispatchEvent(new Event('input', {{ bubbles: true }}));
}}"""

TEXTAREA_READ_SCRIPT = f"""() => {{
  const el = document.querySelector({json.dumps(TEXTAREA_SELECTOR)});
  return el ? (el.value || '') : '';
}}"""


class EditorSurface:
    kind = ""
    replace_script = ""
    read_script = ""

    async def replace(self, page: Any, code: str) -> None:
        await page.evaluate(self.replace_script, code)

    async def read(self, page: Any) -> str:
        value = await page.evaluate(self.read_script)
        return str(value or "")


class CodeMirrorEditor(EditorSurface):
    """Full-range replace through the editor's own document model (one transaction)."""

    kind = "codemirror"
    replace_script = VIEW_REPLACE_SCRIPT
    read_script = VIEW_READ_SCRIPT


class TextareaEditor(EditorSurface):
    """Sets the raw value and fires ``input`` so page listeners observe the change."""

    kind = "textarea"
    replace_script = TEXTAREA_REPLACE_SCRIPT
    read_script = TEXTAREA_READ_SCRIPT


_SURFACES: dict[str, type[EditorSurface]] = {
    CodeMirrorEditor.kind: CodeMirrorEditor,
    TextareaEditor.kind: TextareaEditor,
}


async def detect_editor(page: Any) -> EditorSurface:
    kind = str(await page.evaluate(DETECT_EDITOR_SCRIPT) or "")
    surface = _SURFACES.get(kind)
    if surface is None:
        raise EditorNotFoundError("no editor view or textarea on the page", operation="detect_editor")
    return surface()
