# SPDX-License-Identifier: Apache-2.0
"""deck.gl globe renderer that emits a standalone choropleth bundle.

The bundle references deck.gl via the unpkg CDN. Colors and tooltips are
precomputed in Python for every (mode, year) frame through a
:class:`~timeglobe.binding.FeatureBinder`; the page only switches frames when
the year slider or mode buttons change. Frames that share a binding (for
example every year of a year-independent visualization) are written once.
"""

from __future__ import annotations

import html
import json
import logging
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path
from textwrap import dedent
from typing import Any

from timeglobe.binding.binder import Binding, FeatureBinder
from timeglobe.binding.snapshot import RenderSnapshot
from timeglobe.data.regions import RegionFeature

from .base import GlobeBundle, GlobeRenderer
from .registry import register

LOGGER = logging.getLogger(__name__)

DEFAULT_VIEW = {
    "latitude": 55.751244,
    "longitude": 37.618423,
    "zoom": 3,
    "minZoom": 0,
    "maxZoom": 20,
}


def frame_key(mode: Any, year: int) -> str:
    token = getattr(mode, "value", mode)
    return f"{token or ''}:{year}"


def _coord_pair(coord: Iterable[Any]) -> tuple[float, float] | None:
    seq = list(coord)
    if len(seq) < 2:
        return None
    try:
        return float(seq[0]), float(seq[1])
    except (TypeError, ValueError):
        return None


def _outer_rings(geometry: dict[str, Any]) -> Iterator[list[tuple[float, float]]]:
    gtype = geometry.get("type")
    if gtype == "Polygon":
        polygons = [geometry.get("coordinates") or []]
    elif gtype == "MultiPolygon":
        polygons = geometry.get("coordinates") or []
    elif gtype == "GeometryCollection":
        for geom in geometry.get("geometries", []):
            yield from _outer_rings(geom)
        return
    else:
        return
    for polygon in polygons:
        if not polygon:
            continue
        ring = [p for p in (_coord_pair(c) for c in polygon[0]) if p is not None]
        if ring:
            yield ring


def label_position(geometry: dict[str, Any] | None) -> list[float] | None:
    """Vertex average of the largest outer ring; ``None`` for non-polygons."""

    rings = list(_outer_rings(geometry or {}))
    if not rings:
        return None
    ring = max(rings, key=len)
    lon = sum(p[0] for p in ring) / len(ring)
    lat = sum(p[1] for p in ring) / len(ring)
    return [round(lon, 5), round(lat, 5)]


@register
class DeckGlobeRenderer(GlobeRenderer):
    slug = "deck-globe"
    description = "deck.gl GlobeView choropleth with a year slider."

    def build(self, *, output_dir: Path) -> GlobeBundle:
        binder: FeatureBinder = self._require("binder")
        features: Sequence[RegionFeature] = list(self._require("features"))
        data = self._require("data")
        years = [int(y) for y in self._require("years")]
        if not years:
            raise ValueError("at least one year is required")
        modes = list(self._options.get("modes") or binder.visualization.modes())

        output_dir = Path(output_dir)
        assets_dir = output_dir / "assets"
        assets_dir.mkdir(parents=True, exist_ok=True)

        index_html = output_dir / "index.html"
        script_path = assets_dir / "globe.js"
        config_path = assets_dir / "config.json"
        features_path = assets_dir / "features.geojson"
        frames_path = assets_dir / "frames.json"

        frames = self._compute_frames(binder, features, data, years, modes)
        features_path.write_text(
            json.dumps(self._feature_collection(features)) + "\n", encoding="utf-8"
        )
        frames_path.write_text(json.dumps(frames) + "\n", encoding="utf-8")

        config = self._sanitized_config(binder, years, modes)
        config_path.write_text(json.dumps(config, indent=2) + "\n", encoding="utf-8")
        index_html.write_text(self._render_index_html(config), encoding="utf-8")
        script_path.write_text(self._render_script(), encoding="utf-8")

        LOGGER.debug(
            "Wrote %d frames backed by %d bindings",
            len(frames["index"]),
            len(frames["bindings"]),
        )
        return GlobeBundle(
            output_dir=output_dir,
            index_html=index_html,
            assets=(script_path, config_path, features_path, frames_path),
            frame_count=len(frames["index"]),
        )

    def _compute_frames(
        self,
        binder: FeatureBinder,
        features: Sequence[RegionFeature],
        data: Any,
        years: Sequence[int],
        modes: Sequence[Any],
    ) -> dict[str, Any]:
        bindings: list[dict[str, Any]] = []
        seen: dict[tuple[Any, ...], int] = {}
        index: dict[str, int] = {}
        for mode in modes:
            for year in years:
                snapshot = RenderSnapshot(year=year, data=data, mode=mode)
                cache_key = binder.cache_key(snapshot)
                slot = seen.get(cache_key)
                if slot is None:
                    slot = len(bindings)
                    seen[cache_key] = slot
                    binding = binder.bind(snapshot)
                    bindings.append(self._frame_payload(binding, features))
                index[frame_key(mode, year)] = slot
        return {"bindings": bindings, "index": index}

    @staticmethod
    def _frame_payload(
        binding: Binding, features: Sequence[RegionFeature]
    ) -> dict[str, list[Any]]:
        payload: dict[str, list[Any]] = {
            "fill": [],
            "line": [],
            "text": [],
            "visible": [],
            "tooltip": [],
        }
        for feat in features:
            payload["fill"].append(list(binding.fill_color_of(feat)))
            payload["line"].append(list(binding.line_color_of(feat)))
            payload["text"].append(list(binding.text_color_of(feat)))
            payload["visible"].append(binding.is_visible(feat))
            tooltip = binding.tooltip_of(feat)
            payload["tooltip"].append(tooltip["text"] if tooltip else None)
        return payload

    def _feature_collection(self, features: Sequence[RegionFeature]) -> dict[str, Any]:
        labels = bool(self._options.get("labels"))
        out = []
        for idx, feat in enumerate(features):
            props = dict(feat.feature.get("properties") or {})
            props.update({"tg_index": idx, "tg_code": feat.code, "tg_name": feat.name})
            if labels:
                props["tg_label_position"] = label_position(feat.feature.get("geometry"))
            out.append(
                {
                    "type": "Feature",
                    "geometry": feat.feature.get("geometry"),
                    "properties": props,
                }
            )
        return {"type": "FeatureCollection", "features": out}

    def _sanitized_config(
        self, binder: FeatureBinder, years: Sequence[int], modes: Sequence[Any]
    ) -> dict[str, Any]:
        view = dict(DEFAULT_VIEW)
        view.update(self._options.get("initial_view") or {})
        return {
            "title": self._options.get("title") or binder.visualization.description,
            "visualization": binder.visualization.slug,
            "year_min": min(years),
            "year_max": max(years),
            "year": int(self._options.get("year") or max(years)),
            "modes": [getattr(m, "value", m) for m in modes],
            "labels": bool(self._options.get("labels")),
            "width": self._options.get("width"),
            "height": self._options.get("height"),
            "initial_view": view,
            "features": "assets/features.geojson",
            "frames": "assets/frames.json",
        }

    def _render_index_html(self, config: dict[str, Any]) -> str:
        config_json = json.dumps(config, indent=2).replace("<", "\\u003c")
        title = html.escape(str(config.get("title") or "timeglobe"))
        return (
            dedent(
                f"""
            <!DOCTYPE html>
            <html lang=\"en\">
              <head>
                <meta charset=\"utf-8\" />
                <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
                <title>{title}</title>
                <style>
                  html, body {{ margin: 0; padding: 0; width: 100%; height: 100%; background: #000; color: #f5f7fa; font-family: system-ui, sans-serif; overflow: hidden; }}
                  #tg-globe {{ position: absolute; inset: 0; }}
                  #tg-panel {{ position: absolute; top: 16px; left: 16px; background: rgba(0, 0, 0, 0.55); padding: 12px 16px; border-radius: 8px; z-index: 100; }}
                  #tg-panel h1 {{ font-size: 1.4rem; margin: 0 0 8px 0; }}
                  #tg-modes button {{ background: rgba(255,255,255,.12); color: #fff; border: 1px solid rgba(255,255,255,.25); border-radius: 6px; padding: 4px 8px; cursor: pointer; margin-right: 4px; }}
                  #tg-modes button.active {{ background: #fff; color: #000; }}
                  #tg-slider {{ width: 260px; }}
                  .tg-row {{ display: flex; justify-content: space-between; }}
                </style>
              </head>
              <body>
                <div id=\"tg-globe\"></div>
                <div id=\"tg-panel\">
                  <h1>{title}</h1>
                  <div id=\"tg-modes\"></div>
                  <input id=\"tg-slider\" type=\"range\" />
                  <div class=\"tg-row\"><strong data-tg-year>—</strong><span data-tg-max>—</span></div>
                </div>
                <script>
                  window.TIMEGLOBE_CONFIG = {config_json};
                </script>
                <script src=\"https://unpkg.com/deck.gl@8.9.35/dist.min.js\"></script>
                <script src=\"assets/globe.js\"></script>
              </body>
            </html>
            """
            ).strip()
            + "\n"
        )

    def _render_script(self) -> str:
        return (
            dedent(
                """
            (async function () {
              const config = window.TIMEGLOBE_CONFIG || {};
              const container = document.getElementById("tg-globe");
              const slider = document.getElementById("tg-slider");
              const yearEl = document.querySelector("[data-tg-year]");
              const maxEl = document.querySelector("[data-tg-max]");
              const modesEl = document.getElementById("tg-modes");

              if (!window.deck) {
                container.innerHTML = "<strong>deck.gl failed to load.</strong>";
                return;
              }

              const [features, frames] = await Promise.all([
                fetch(config.features).then((r) => r.json()),
                fetch(config.frames).then((r) => r.json()),
              ]);

              const state = { year: config.year, mode: config.modes[0] };
              const key = () => `${state.mode ?? ""}:${state.year}`;
              const frame = () => frames.bindings[frames.index[key()]];

              slider.min = config.year_min;
              slider.max = config.year_max;
              slider.value = state.year;
              maxEl.textContent = config.year_max;

              const idx = (f) => f.properties.tg_index;

              function layers() {
                const current = frame();
                const data = features.features.filter((f) => current.visible[idx(f)]);
                const out = [
                  new deck.GeoJsonLayer({
                    id: "regions",
                    data,
                    filled: true,
                    stroked: true,
                    pickable: true,
                    getFillColor: (f) => current.fill[idx(f)],
                    getLineColor: (f) => current.line[idx(f)],
                    getLineWidth: 1000,
                    lineWidthMinPixels: 0.1,
                    updateTriggers: { getFillColor: key(), getLineColor: key() },
                  }),
                ];
                if (config.labels) {
                  out.push(
                    new deck.TextLayer({
                      id: "labels",
                      data: data.filter((f) => f.properties.tg_label_position),
                      sizeUnits: "meters",
                      getSize: 17000,
                      getTextAnchor: "middle",
                      getAlignmentBaseline: "center",
                      parameters: { depthTest: false },
                      fontFamily: "sans-serif",
                      getPosition: (f) => f.properties.tg_label_position,
                      getText: (f) => current.tooltip[idx(f)] || "",
                      getColor: (f) => current.text[idx(f)],
                      updateTriggers: { getText: key(), getColor: key() },
                    })
                  );
                }
                return out;
              }

              const globe = new deck.Deck({
                parent: container,
                views: [new deck._GlobeView({ resolution: 10 })],
                initialViewState: config.initial_view,
                controller: true,
                parameters: { cull: true },
                getTooltip: ({ object }) => {
                  if (!object || !object.properties) return null;
                  const text = frame().tooltip[idx(object)];
                  return text ? { text } : null;
                },
                layers: layers(),
              });

              function refresh() {
                yearEl.textContent = state.year;
                globe.setProps({ layers: layers() });
              }

              slider.addEventListener("input", (event) => {
                state.year = event.target.valueAsNumber;
                refresh();
              });

              config.modes.forEach((mode) => {
                if (mode === null) return;
                const button = document.createElement("button");
                button.textContent = mode;
                button.addEventListener("click", () => {
                  state.mode = mode;
                  modesEl.querySelectorAll("button").forEach((b) => b.classList.remove("active"));
                  button.classList.add("active");
                  refresh();
                });
                if (mode === state.mode) button.classList.add("active");
                modesEl.appendChild(button);
              });

              refresh();
            })().catch((error) => {
              console.error("timeglobe bootstrap failed", error);
            });
            """
            ).strip()
            + "\n"
        )
