"""Static plotly figures from a surface's display list."""

from __future__ import annotations

from typing import Any

import plotly.graph_objects as go

from ..scene.surface import DrawElement, Surface

TRANSPARENT = "rgba(0,0,0,0)"

_LAYOUT_DEFAULTS = dict(
    template="plotly_white",
    margin=dict(l=0, r=0, t=0, b=0),
    showlegend=False,
    font=dict(family="Inter, -apple-system, BlinkMacSystemFont, Segoe UI, sans-serif", size=11),
)


def _color(value: Any) -> str:
    return TRANSPARENT if value in (None, "none") else value


def _line(el: DrawElement) -> dict:
    stroke = el.attrs.get("stroke", "none")
    width = el.attrs.get("stroke_width", 1.0) if stroke != "none" else 0
    return dict(color=_color(stroke), width=width)


def _rect_shape(el: DrawElement) -> dict:
    a = el.attrs
    return dict(
        type="rect", xref="x", yref="y", layer="above",
        x0=a["x"], y0=a["y"], x1=a["x"] + a["width"], y1=a["y"] + a["height"],
        fillcolor=_color(a.get("fill")), line=_line(el), opacity=a.get("opacity", 1.0),
    )


def _line_shape(el: DrawElement) -> dict:
    a = el.attrs
    return dict(
        type="line", xref="x", yref="y", layer="above",
        x0=a["x1"], y0=a["y1"], x1=a["x2"], y1=a["y2"], line=_line(el),
    )


def _annotation(el: DrawElement) -> dict:
    a = el.attrs
    return dict(
        x=a["x"], y=a["y"], xref="x", yref="y", text=str(a["text"]),
        showarrow=False, textangle=(a.get("rotate", 0) + 180) % 360 - 180,
        opacity=a.get("opacity", 1.0),
    )


def surface_to_figure(surface: Surface) -> go.Figure:
    """Build a plotly figure showing ``surface`` as currently styled.

    Rects and lines become layout shapes, paths become line traces,
    circles one marker trace and text annotations, all in paint order
    and in the surface's pixel coordinates (y pointing down). Elements
    with a tooltip get an invisible hover marker at their center.
    """
    fig = go.Figure()
    shapes: list[dict] = []
    annotations: list[dict] = []
    circles: dict[str, list] = {"x": [], "y": [], "size": [], "color": [], "line": [], "text": []}
    hover: dict[str, list] = {"x": [], "y": [], "text": []}

    for el in surface.elements():
        a = el.attrs
        if el.kind == "rect":
            shapes.append(_rect_shape(el))
            if "tooltip" in a:
                hover["x"].append(a["x"] + a["width"] / 2)
                hover["y"].append(a["y"] + a["height"] / 2)
                hover["text"].append(a["tooltip"])
        elif el.kind == "line":
            shapes.append(_line_shape(el))
        elif el.kind == "text":
            annotations.append(_annotation(el))
        elif el.kind == "path":
            xs, ys = zip(*a["points"]) if a["points"] else ((), ())
            fig.add_trace(go.Scatter(
                x=list(xs), y=list(ys), mode="lines", line=_line(el),
                hoverinfo="skip", name=f"entity {a.get('entity', el.handle)}",
            ))
        elif el.kind == "circle":
            circles["x"].append(a["cx"])
            circles["y"].append(a["cy"])
            circles["size"].append(2 * a["r"])
            circles["color"].append(_color(a.get("fill")))
            circles["line"].append(_color(a.get("stroke")))
            circles["text"].append(f"entity {a.get('entity', el.handle)}")

    if circles["x"]:
        fig.add_trace(go.Scatter(
            x=circles["x"], y=circles["y"], mode="markers", hovertext=circles["text"],
            hoverinfo="text",
            marker=dict(size=circles["size"], color=circles["color"],
                        line=dict(color=circles["line"], width=1)),
        ))
    if hover["x"]:
        fig.add_trace(go.Scatter(
            x=hover["x"], y=hover["y"], mode="markers", hovertext=hover["text"],
            hoverinfo="text", marker=dict(size=6, opacity=0),
        ))

    rect = surface.rect
    fig.update_layout(
        **_LAYOUT_DEFAULTS,
        width=rect.width, height=rect.height,
        shapes=shapes, annotations=annotations,
        xaxis=dict(range=[0, rect.width], visible=False),
        yaxis=dict(range=[rect.height, 0], visible=False),
    )
    return fig
