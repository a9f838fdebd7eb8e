# apps/api/main.py
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from lineyaml.config import SerializeConfig
from lineyaml.convert import from_python, to_python
from lineyaml.document import parse, serialize
from lineyaml.errors import YamlError
from lineyaml.log import log

app = FastAPI(title="lineyaml API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ParseRequest(BaseModel):
    text: str


class SerializeRequest(BaseModel):
    document: Any = None
    config: SerializeConfig = Field(default_factory=SerializeConfig.from_env)


def _reject(exc: YamlError) -> HTTPException:
    log(f"API request rejected ({exc.kind}): {exc}")
    return HTTPException(status_code=400, detail=exc.as_dict())


@app.get("/healthz", response_class=PlainTextResponse)
def healthz() -> str:
    return "ok"


@app.post("/parse")
def parse_document(request: ParseRequest) -> dict[str, Any]:
    """Parse YAML text and return the tree as JSON (scalars stay strings)."""
    try:
        root = parse(request.text)
    except YamlError as exc:
        raise _reject(exc) from exc
    return {"type": root.type.value, "document": to_python(root)}


@app.post("/serialize", response_class=PlainTextResponse)
def serialize_document(request: SerializeRequest) -> str:
    """Render a JSON document as YAML text."""
    try:
        return serialize(from_python(request.document), config=request.config)
    except YamlError as exc:
        raise _reject(exc) from exc
