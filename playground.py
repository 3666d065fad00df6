"""
shapeview playground — Web UI and JSON API for trying shapes against data.

Run with: uv run python playground.py
"""

import warnings
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from shapeview.model import ViewConfig
from shapeview.property_values import get_property_values
from shapeview.report import build_report
from shapeview.store import find_subject, list_subjects, load_graph

app = FastAPI()
templates = Jinja2Templates(directory=Path(__file__).parent / "templates")

EXAMPLES_DIR = Path(__file__).parent / "examples"

EXAMPLES = {
    "People": {
        "shapes": "people.shacl.ttl",
        "data": "people.ttl",
        "focus_node": "http://example.org/people#alice",
    },
}


class PropertyValuesRequest(BaseModel):
    shapes: str = ""
    data: str = ""
    focus_node: str = ""
    strict_paths: bool = False


def _example_payload(name: str) -> dict:
    example = EXAMPLES[name]
    return {
        "name": name,
        "shapes": (EXAMPLES_DIR / example["shapes"]).read_text(),
        "data": (EXAMPLES_DIR / example["data"]).read_text(),
        "focus_node": example["focus_node"],
    }


@app.post("/api/property-values")
def property_values(req: PropertyValuesRequest):
    try:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            shapes_graph = load_graph(req.shapes, source="shapes")
            data_graph = load_graph(req.data, source="data")
            focus_node = find_subject(data_graph, req.focus_node)
            config = ViewConfig(strict_paths=req.strict_paths)
            values = get_property_values(
                focus_node=focus_node,
                shapes_graph=shapes_graph,
                data_graph=data_graph,
                config=config,
            )
            report = build_report(values, focus_node=focus_node, config=config)
        return {
            "ok": True,
            "subjects": [str(s) for s in list_subjects(data_graph)],
            "focus_node": None if focus_node is None else str(focus_node),
            "report": report.to_dict(),
            "warnings": [
                str(w.message) for w in caught if issubclass(w.category, UserWarning)
            ],
        }
    except Exception as e:
        return {
            "ok": False,
            "error": f"{type(e).__name__}: {e}",
        }


@app.get("/api/examples")
def examples():
    return {"examples": [_example_payload(name) for name in EXAMPLES]}


@app.get("/", response_class=HTMLResponse)
def index(request: Request):
    return templates.TemplateResponse(
        request,
        "playground.html",
        {"examples": [_example_payload(name) for name in EXAMPLES]},
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8420)
