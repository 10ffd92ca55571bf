from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import PlainTextResponse
from typing import List
from urllib.parse import quote
from .completion import CompletionService, ServiceError, get_completion_service
from .export import export_filename, format_plan_for_export
from .graph import generate, modify
from .schemas import GenerateRequest, GeneratedPlan, ModificationRequest, PlanSection, SectionUpdate, SectionizeRequest
from .sectionizer import sectionize
from .store import PlanNotFoundError, PlanStore, get_store
import logging
import re

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

api_app = FastAPI(title="Business Plan Generator")


def _load(store: PlanStore, plan_id: str) -> GeneratedPlan:
    try:
        return store.get(plan_id)
    except PlanNotFoundError:
        raise HTTPException(status_code=404, detail=f"No plan found with id: {plan_id}")


def content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback and the UTF-8 name (RFC 6266 / 5987)."""
    fallback = re.sub(r'[^\x20-\x7e]|["\\]', "_", filename)
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


def _upstream_failure(e: ServiceError) -> HTTPException:
    logger.error(f"Completion service error: {e}", exc_info=True)
    return HTTPException(status_code=e.status_code, detail=str(e))


@api_app.post("/sectionize", response_model=List[PlanSection])
async def sectionize_text(body: SectionizeRequest):
    return sectionize(body.text)


@api_app.post("/plans", response_model=GeneratedPlan)
def generate_plan(
    body: GenerateRequest,
    store: PlanStore = Depends(get_store),
    service: CompletionService = Depends(get_completion_service),
):
    try:
        return generate(body.input, user_id=body.user_id, completion_service=service, store=store)
    except ServiceError as e:
        raise _upstream_failure(e)
    except Exception as e:
        logger.error(f"Internal error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error generating plan: {str(e)}")


@api_app.get("/plans/{plan_id}", response_model=GeneratedPlan)
def get_plan(plan_id: str, store: PlanStore = Depends(get_store)):
    return _load(store, plan_id)


@api_app.get("/users/{user_id}/plans", response_model=List[GeneratedPlan])
def list_plans(user_id: str, store: PlanStore = Depends(get_store)):
    return store.list_for_user(user_id)


@api_app.post("/plans/{plan_id}/modify", response_model=GeneratedPlan)
def modify_plan(
    plan_id: str,
    body: ModificationRequest,
    store: PlanStore = Depends(get_store),
    service: CompletionService = Depends(get_completion_service),
):
    plan = _load(store, plan_id)
    try:
        return modify(plan, body.request, completion_service=service, store=store)
    except ServiceError as e:
        raise _upstream_failure(e)
    except Exception as e:
        logger.error(f"Internal error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error modifying plan: {str(e)}")


@api_app.put("/plans/{plan_id}/sections/{index}", response_model=GeneratedPlan)
def update_section(plan_id: str, index: int, body: SectionUpdate, store: PlanStore = Depends(get_store)):
    try:
        return store.update_section(plan_id, index, body.content)
    except PlanNotFoundError:
        raise HTTPException(status_code=404, detail=f"No plan found with id: {plan_id}")
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))


@api_app.delete("/plans/{plan_id}", status_code=204)
def delete_plan(plan_id: str, store: PlanStore = Depends(get_store)):
    try:
        store.delete(plan_id)
    except PlanNotFoundError:
        raise HTTPException(status_code=404, detail=f"No plan found with id: {plan_id}")


@api_app.get("/plans/{plan_id}/export", response_class=PlainTextResponse)
def export_plan(plan_id: str, store: PlanStore = Depends(get_store)):
    plan = _load(store, plan_id)
    response = PlainTextResponse(
        format_plan_for_export(plan),
        headers={"Content-Disposition": content_disposition(export_filename(plan))},
    )
    # counted only once the response could be built
    store.increment_export_count(plan_id)
    return response


@api_app.get("/")
async def root():
    return {"message": "Business Plan Generator API"}
