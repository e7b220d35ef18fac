import logging
from collections import Counter
from typing import Any

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .models import HealthResponse, WorkflowRequest, WorkflowResponse, WorkflowSummary
from .samples import SAMPLE_BUSINESSES
from .utils.logging import configure_logging
from .workflow import PreconditionError, WorkflowArtifact, synthesize_async
from .workflow.roster import clean_roster

load_dotenv()

settings = get_settings()
configure_logging(settings)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Floworx Workflow Synthesizer API",
    description="Generates personalized email automation workflows from onboarding data",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _summarize(artifact: WorkflowArtifact, requested_managers: int, requested_suppliers: int) -> WorkflowResponse:
    classifier = next((n for n in artifact.nodes if n.role == "ai"), None)
    trigger = next((n for n in artifact.nodes if n.role == "trigger"), None)
    system_message = classifier.parameters["options"]["systemMessage"] if classifier else ""

    return WorkflowResponse(
        summary=WorkflowSummary(
            name=artifact.name,
            total_nodes=len(artifact.nodes),
            node_roles=dict(Counter(node.role for node in artifact.nodes)),
            connections=len(artifact.connections),
            managers_included=f"{len(artifact.meta.custom_managers)} of {requested_managers}",
            suppliers_included=f"{len(artifact.meta.custom_suppliers)} of {requested_suppliers}",
        ),
        system_message_preview=system_message[:200],
        trigger_filter=trigger.parameters["filters"]["q"] if trigger else None,
        workflow=artifact.to_dict(),
    )


async def _generate(payload: dict[str, Any]) -> WorkflowResponse:
    request = WorkflowRequest.model_validate(payload)
    try:
        artifact = await synthesize_async(
            request.business_data,
            {"label_mappings": request.label_mappings},
            request.custom_managers,
            request.custom_suppliers,
            request.phone_system,
            settings=settings,
        )
    except PreconditionError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return _summarize(
        artifact,
        len(clean_roster(request.custom_managers)),
        len(clean_roster(request.custom_suppliers)),
    )


@app.get("/api/health", response_model=HealthResponse)
def health():
    return HealthResponse(status="ok")


@app.post("/api/workflows/generate", response_model=WorkflowResponse)
async def generate_workflow_endpoint(request: WorkflowRequest):
    """Generate a personalized workflow for any business."""
    return await _generate(request.model_dump())


@app.get("/api/workflows/sample-businesses")
def list_sample_businesses():
    return {"industries": list(SAMPLE_BUSINESSES), "samples": SAMPLE_BUSINESSES}


@app.post("/api/workflows/quick-generate/{industry}", response_model=WorkflowResponse)
async def quick_generate_endpoint(industry: str):
    """Generate a workflow from the sample business of one industry."""
    sample = SAMPLE_BUSINESSES.get(industry)
    if sample is None:
        raise HTTPException(
            status_code=400,
            detail=f"Industry '{industry}' not supported. Supported: {', '.join(SAMPLE_BUSINESSES)}",
        )
    logger.info("Quick-generating %s sample workflow", industry)
    return await _generate(sample)
