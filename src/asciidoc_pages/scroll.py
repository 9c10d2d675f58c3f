#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/asciidoc_pages/scroll.py
"""Scroll restoration for anchor navigation.

Pages built from AsciiDoc link heavily to section anchors. The browser
runtime calls two hooks: one once after the initial render, one on every
client-side route change. Both resolve the URL fragment to the vertical
offset of the element carrying that id. Absence of a target is a normal
outcome: the initial render does nothing and the route hook defers to the
router's default behavior.

The hooks are written against small window/document protocols so the same
logic can be exercised without a browser. :data:`SCROLL_RESTORATION_SCRIPT`
is the same behavior as a standalone snippet for hosts to add to their
page template.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Union
from urllib.parse import unquote


class Element(Protocol):
    offset_top: int


class DocumentLike(Protocol):
    def get_element_by_id(self, element_id: str) -> Optional[Element]: ...


class WindowLike(Protocol):
    location: "Location"

    def request_animation_frame(self, callback: Callable[[], None]) -> None: ...

    def scroll_to(self, x: int, y: int) -> None: ...


@dataclass(frozen=True)
class Location:
    hash: str = ""


@dataclass(frozen=True)
class RouterProps:
    location: Location


def get_target_offset(fragment: str, document: DocumentLike) -> Optional[int]:
    """Return the top offset of the element named by ``fragment``, if any."""
    element_id = unquote(fragment.replace("#", "", 1))
    if element_id != "":
        element = document.get_element_by_id(element_id)
        if element is not None:
            return element.offset_top
    return None


def on_initial_client_render(window: WindowLike, document: DocumentLike) -> None:
    """Scroll to the fragment target after the next paint."""

    def restore() -> None:
        offset = get_target_offset(window.location.hash, document)
        if offset is not None:
            window.scroll_to(0, offset)

    window.request_animation_frame(restore)


def should_update_scroll(router_props: RouterProps, document: DocumentLike) -> Union[list[int], bool]:
    """Return the ``[x, y]`` scroll target for a route change, or ``True``."""
    offset = get_target_offset(router_props.location.hash, document)
    return [0, offset] if offset is not None else True


SCROLL_RESTORATION_SCRIPT = """\
(function () {
  var getTargetOffset = function (hash) {
    var id = window.decodeURI(hash.replace("#", ""));
    if (id !== "") {
      var element = document.getElementById(id);
      if (element) {
        return element.offsetTop;
      }
    }
    return null;
  };

  var restore = function () {
    var offset = getTargetOffset(window.location.hash);
    if (offset !== null) {
      window.scrollTo(0, offset);
    }
  };

  window.addEventListener("load", function () {
    window.requestAnimationFrame(restore);
  });
  window.addEventListener("hashchange", restore);
})();
"""
