from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from language_tool_python.utils import LanguageToolError
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from api.models import CheckRequest, CheckResponse, EvaluateRequest, EvaluationResponse
from pipeline.orchestrator import EvaluationOrchestrator
from tools.grammar_checker import get_legend
from utils.config import (
    ALLOWED_ORIGINS,
    DEFAULT_RATE_LIMIT,
    EVALUATE_RATE_LIMIT,
    RATE_LIMIT_ENABLED,
)

# Initialize rate limiter
limiter = Limiter(key_func=get_remote_address, enabled=RATE_LIMIT_ENABLED)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Stop any LanguageTool servers started by requests
    orchestrator.close()


app = FastAPI(
    title="Writing Evaluation API",
    description="Deterministic rubric scoring for student writing",
    version="1.0.0",
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["POST", "GET"],
    allow_headers=["*"],
)

print("🚀 Starting Writing Evaluation API...")
orchestrator = EvaluationOrchestrator()
print("✓ API ready\n")


@app.get("/")
@limiter.limit(DEFAULT_RATE_LIMIT)
async def root(request: Request):
    """Root endpoint - API banner"""
    return {
        "message": "Writing Evaluation API",
        "status": "running",
        "version": "1.0.0",
        "features": ["rubric_scoring", "grammar_check", "teacher_overrides"],
    }


@app.get("/health")
@limiter.limit(DEFAULT_RATE_LIMIT)
async def health_check(request: Request):
    """Health check endpoint"""
    return {
        "status": "healthy",
        "orchestrator": "initialized",
        "grammar_checker": "started"
        if orchestrator.grammar_checker is not None
        else "lazy",
        "rate_limiting": "enabled" if limiter.enabled else "disabled",
    }


@app.get("/legend")
@limiter.limit(DEFAULT_RATE_LIMIT)
async def legend(request: Request):
    """Issue groups, symbols and colours used to annotate text"""
    return get_legend()


@app.post("/check", response_model=CheckResponse)
@limiter.limit(EVALUATE_RATE_LIMIT)
def check_text(request: Request, payload: CheckRequest):
    """Detect writing issues without scoring."""
    try:
        return CheckResponse(**orchestrator.check(payload.text, payload.language))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (LanguageToolError, OSError) as e:
        print(f"❌ Grammar checker error: {str(e)}")
        raise HTTPException(status_code=502, detail=f"Grammar checker unavailable: {str(e)}")
    except Exception as e:
        print(f"❌ Unexpected error: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@app.post("/evaluate", response_model=EvaluationResponse)
@limiter.limit(EVALUATE_RATE_LIMIT)
def evaluate_text(request: Request, payload: EvaluateRequest):
    """
    Score text on the writing rubric.
    Issues are detected with LanguageTool unless the caller supplies them.
    """
    try:
        result = orchestrator.process(
            text=payload.text,
            issues=payload.issues,
            teacher_override_scores=payload.teacher_override_scores,
            language=payload.language,
        )
        return EvaluationResponse(**result)

    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        print(f"❌ Unexpected error: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")
