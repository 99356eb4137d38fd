"""FastAPI application exposing segmentation and rendering over HTTP."""

from __future__ import annotations

from typing import Callable, List, Optional

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel

from ..languages import DEFAULT_REGISTRY, Language, LanguageRegistry
from ..render import SectionRenderer
from ..segmenter import segment_text


class SegmentRequest(BaseModel):
    filename: str
    text: str


class RenderRequest(SegmentRequest):
    highlight: bool = True


class SectionPayload(BaseModel):
    docs: str
    code: str


class RenderedSectionPayload(BaseModel):
    docs_html: str
    code_html: str


class SegmentResponse(BaseModel):
    language: str
    sections: List[SectionPayload]


class RenderResponse(BaseModel):
    language: str
    sections: List[RenderedSectionPayload]


class LanguageInfo(BaseModel):
    extension: str
    name: str
    singleline: str
    multiline_start: Optional[str] = None
    multiline_end: Optional[str] = None
    doc_marker: Optional[str] = None


class HealthResponse(BaseModel):
    status: str


def _default_registry() -> LanguageRegistry:
    return DEFAULT_REGISTRY


def create_app(
    registry_factory: Callable[[], LanguageRegistry] = _default_registry,
) -> FastAPI:
    """Create the FastAPI application exposing litdoc operations."""

    app = FastAPI(title="litdoc service", version="1.0.0")

    async def get_registry() -> LanguageRegistry:
        return registry_factory()

    def _language_for(registry: LanguageRegistry, filename: str) -> Language:
        language = registry.for_path(filename)
        if language is None:
            raise HTTPException(status_code=422, detail=f"No language registered for {filename}")
        return language

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/languages", response_model=List[LanguageInfo])
    async def languages(
        registry: LanguageRegistry = Depends(get_registry),
    ) -> List[LanguageInfo]:
        return [
            LanguageInfo(
                extension=extension,
                name=language.name,
                singleline=language.singleline,
                multiline_start=language.multiline_start,
                multiline_end=language.multiline_end,
                doc_marker=language.doc_marker,
            )
            for extension, language in registry.items()
        ]

    @app.post("/segment", response_model=SegmentResponse)
    async def segment_source(
        payload: SegmentRequest,
        registry: LanguageRegistry = Depends(get_registry),
    ) -> SegmentResponse:
        language = _language_for(registry, payload.filename)
        sections = segment_text(language, payload.text)
        return SegmentResponse(
            language=language.name,
            sections=[SectionPayload(docs=section.docs, code=section.code) for section in sections],
        )

    @app.post("/render", response_model=RenderResponse)
    def render_source(
        payload: RenderRequest,
        registry: LanguageRegistry = Depends(get_registry),
    ) -> RenderResponse:
        # Plain `def` so Markdown and Pygments run in the threadpool.
        language = _language_for(registry, payload.filename)
        renderer = SectionRenderer(highlight=payload.highlight)
        rendered = renderer.render(segment_text(language, payload.text), language)
        return RenderResponse(
            language=language.name,
            sections=[
                RenderedSectionPayload(docs_html=item.docs_html, code_html=item.code_html)
                for item in rendered
            ],
        )

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
