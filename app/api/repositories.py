from typing import Annotated

from fastapi import APIRouter, Depends, Path
from fastapi.responses import HTMLResponse, Response

from app.core.chart import chart_headers
from app.github.source import StarSource
from app.services.chart import RepositoryChartService
from app.services.details import RepositoryDetailsService
from app.utils.github import get_star_source
from app.utils.trace import Tracer, get_tracer

router = APIRouter(tags=["Repositories"])


@router.get("/{owner}/{repo}.svg", response_class=Response)
def repository_chart(owner: Annotated[str, Path()],
                     repo: Annotated[str, Path()],
                     source: StarSource = Depends(get_star_source),
                     tracer: Tracer = Depends(get_tracer)) -> Response:
    """@brief Render the star history chart of a repository as SVG.

    @param owner Repository owner path segment.
    @param repo Repository name path segment.
    @param source Star source resolved from the configured cache backend.
    @param tracer Tracer receiving request logs and timing spans.
    @return SVG response with public caching headers. The body is the error
    graphic when the repository has too many stars.
    """
    service = RepositoryChartService(source=source, tracer=tracer)
    content = service.render_chart(owner, repo)
    return Response(content=content, headers=chart_headers())


@router.get("/{owner}/{repo}", response_class=HTMLResponse)
def repository_details(owner: Annotated[str, Path()],
                       repo: Annotated[str, Path()],
                       source: StarSource = Depends(get_star_source),
                       tracer: Tracer = Depends(get_tracer)) -> HTMLResponse:
    """@brief Render the repository details page.

    @param owner Repository owner path segment.
    @param repo Repository name path segment.
    @param source Star source resolved from the configured cache backend.
    @param tracer Tracer receiving request logs and timing spans.
    @return HTMLResponse containing the repository's interactive star chart.
    """
    service = RepositoryDetailsService(source=source, tracer=tracer)
    html = service.render_details(owner, repo)
    return HTMLResponse(content=html)
