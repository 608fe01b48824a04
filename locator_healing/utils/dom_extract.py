from __future__ import annotations

from locator_healing.core.metadata import CandidateElement

COLLECT_CANDIDATES_SCRIPT = r"""
const includeNode = (node) => {
  if (!(node instanceof Element)) return false;
  const tag = node.tagName.toLowerCase();
  if (["input", "button", "a", "select", "textarea", "label"].includes(tag)) return true;
  if (node.hasAttribute("role")) return true;
  if (node.hasAttribute("aria-label")) return true;
  if (node.hasAttribute("data-test-id") || node.hasAttribute("data-testid")) return true;
  if (typeof node.onclick === "function") return true;
  return false;
};

const bestSelector = (node) => {
  if (node.id) return `#${CSS.escape(node.id)}`;
  for (const attr of ["data-test-id", "data-testid"]) {
    if (node.getAttribute(attr)) return `[${attr}="${node.getAttribute(attr)}"]`;
  }
  if (node.getAttribute("name")) return `${node.tagName.toLowerCase()}[name="${node.getAttribute("name")}"]`;
  if (node.classList.length) return `${node.tagName.toLowerCase()}.${Array.from(node.classList).slice(0, 3).map((name) => CSS.escape(name)).join(".")}`;
  return node.tagName.toLowerCase();
};

const items = [];
for (const node of document.querySelectorAll("*")) {
  if (!includeNode(node)) continue;
  const rect = node.getBoundingClientRect();
  items.push({
    selector_hint: bestSelector(node),
    tag: node.tagName.toLowerCase(),
    text: (node.innerText || node.textContent || "").trim().slice(0, 200),
    attributes: Array.from(node.attributes).reduce((acc, attr) => {
      acc[attr.name] = attr.value;
      return acc;
    }, {}),
    parent_tag: node.parentElement ? node.parentElement.tagName.toLowerCase() : "",
    rect: {x: rect.x, y: rect.y, width: rect.width, height: rect.height},
  });
}
return items.slice(0, 120);
"""


def extract_candidate_elements(driver) -> list[CandidateElement]:
    raw_candidates = driver.execute_script(COLLECT_CANDIDATES_SCRIPT) or []
    return [
        CandidateElement(
            selector_hint=item.get("selector_hint", ""),
            tag=item.get("tag", ""),
            text=item.get("text", ""),
            attributes=item.get("attributes", {}),
            parent_tag=item.get("parent_tag", ""),
            rect=item.get("rect", {}),
        )
        for item in raw_candidates
    ]
