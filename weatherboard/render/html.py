"""Serialize Node trees and the dashboard surface to HTML."""

import html

from weatherboard.config.schema import GeolocationConfig
from weatherboard.models.common import UnitPreference
from weatherboard.render.node import Node, Raw, el
from weatherboard.view import surface as slots
from weatherboard.view.surface import Slot, Surface

VOID_TAGS = frozenset({"img", "input", "br", "meta", "link"})

GEOLOCATION_SCRIPT = """
(function () {
  if (!('geolocation' in navigator)) return;
  var post = function (url, body) {
    return fetch(url, {
      method: 'POST',
      headers: {'Content-Type': 'application/json'},
      body: JSON.stringify(body)
    });
  };
  navigator.geolocation.getCurrentPosition(
    function (pos) {
      post('/location', {latitude: pos.coords.latitude, longitude: pos.coords.longitude})
        .then(function (res) { return res.json(); })
        .then(function (data) { if (data.status === 'success') window.location.reload(); });
    },
    function (err) {
      var codes = {1: 'permission_denied', 2: 'position_unavailable', 3: 'timeout'};
      post('/location/error', {code: codes[err.code] || 'position_unavailable', message: err.message});
    },
    %(options)s
  );
})();
"""


def to_html(node: Node | str) -> str:
    if isinstance(node, Raw):
        return str(node)
    if isinstance(node, str):
        return html.escape(node, quote=False)

    attrs = "".join(
        f' {name}="{html.escape(value, quote=True)}"' for name, value in node.attrs.items()
    )
    if node.tag in VOID_TAGS:
        return f"<{node.tag}{attrs}>"
    inner = "".join(to_html(child) for child in node.children)
    return f"<{node.tag}{attrs}>{inner}</{node.tag}>"


def slot_node(slot: Slot, tag: str = "div") -> Node:
    return el(
        tag,
        slot.text or None,
        *slot.children,
        id=slot.name.replace("_", "-"),
        class_="hidden" if slot.hidden else None,
    )


def geolocation_options(config: GeolocationConfig) -> str:
    return (
        "{enableHighAccuracy: %s, maximumAge: %d, timeout: %d}"
        % (
            "true" if config.enable_high_accuracy else "false",
            config.maximum_age_ms,
            config.timeout_ms,
        )
    )


def build_page(surface: Surface, geolocation: GeolocationConfig | None = None) -> Node:
    if geolocation is None:
        geolocation = GeolocationConfig()

    toggles = el(
        "div",
        *(
            el(
                "form",
                el(
                    "button",
                    unit.symbol,
                    type="submit",
                    aria_pressed="true" if surface.unit_pressed[unit] else "false",
                ),
                method="post",
                action=f"/units/{unit.value}",
            )
            for unit in UnitPreference
        ),
        class_="unit-toggle",
    )

    search = el(
        "section",
        el(
            "form",
            el("input", type="text", name="city", placeholder="Search city", id="search-input"),
            el("button", "Search", type="submit"),
            method="get",
            action="/search",
            id="search-form",
        ),
        slot_node(surface[slots.SEARCH_ERROR]),
        slot_node(surface[slots.SEARCH_EMPTY]),
        slot_node(surface[slots.SEARCH_RESULT]),
        class_="search",
    )

    body = el(
        "body",
        el("header", el("h1", "Weather Dashboard"), toggles),
        slot_node(surface[slots.BANNER]),
        search,
        el(
            "section",
            el("h2", "Your Location"),
            slot_node(surface[slots.LOCATION_LOADING]),
            slot_node(surface[slots.LOCATION]),
            class_="location",
        ),
        el(
            "section",
            el("h2", "Cities"),
            slot_node(surface[slots.CITIES_LOADING]),
            slot_node(surface[slots.CITIES]),
            class_="cities",
        ),
        el("script", Raw(GEOLOCATION_SCRIPT % {"options": geolocation_options(geolocation)})),
    )

    head = el(
        "head",
        el("meta", charset="utf-8"),
        el("title", "Weather Dashboard"),
        el("style", Raw(".hidden { display: none; }")),
    )
    return el("html", head, body, lang="en")


def render_page(surface: Surface, geolocation: GeolocationConfig | None = None) -> str:
    return "<!DOCTYPE html>\n" + to_html(build_page(surface, geolocation))
