# ============================================================
# Chat Client FastAPI App
# ------------------------------------------------------------
# Thin HTTP surface over ChatSession:
#   - /ask   single stateless question
#   - /chat  multi-turn, history supplied by the caller
# Failures come back as structured JSON so a UI can render them.
# ============================================================

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel
from typing import List, Optional

# --- Local imports ---
from src.settings import get_settings
from src.logging_utils import configure_logging
from src.chat import ChatSession, CompletionError, InvalidTranscriptError, Transcript, Turn


def build_session() -> ChatSession:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    return ChatSession.from_settings(settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # credential is resolved once; a missing key (ConfigurationError) aborts startup
    app.state.session = build_session()
    yield


def get_session(request: Request) -> ChatSession:
    return request.app.state.session


# ------------------------------------------------------------
# 🚀 FastAPI init
# ------------------------------------------------------------
app = FastAPI(title="Chat Client API", version="0.1", lifespan=lifespan)

# ------------------------------------------------------------
# 📦 Pydantic models
# ------------------------------------------------------------
class ChatTurn(BaseModel):
    role: str
    content: str = ""

class AskRequest(BaseModel):
    question: str
    model: Optional[str] = None

class ChatRequest(BaseModel):
    message: str
    history: Optional[List[ChatTurn]] = None
    system: Optional[str] = None
    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None

class ChatPayload(BaseModel):
    text: str
    model: str
    engine: str


def _failure_detail(e: CompletionError) -> dict:
    return {"kind": e.kind.value, "status": e.status, "type": e.error_type, "message": e.message}


# ------------------------------------------------------------
# ❓ Single question
# ------------------------------------------------------------
@app.post("/ask", response_model=ChatPayload)
def ask(req: AskRequest, session: ChatSession = Depends(get_session)):
    try:
        text = session.ask_question(req.question, model=req.model)
    except CompletionError as e:
        raise HTTPException(status_code=502, detail=_failure_detail(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return ChatPayload(text=text, model=req.model or session.default_model, engine=session.engine)

# ------------------------------------------------------------
# 💬 Multi-turn chat
# ------------------------------------------------------------
@app.post("/chat", response_model=ChatPayload)
def chat(req: ChatRequest, session: ChatSession = Depends(get_session)):
    try:
        transcript = Transcript([Turn(h.role, h.content) for h in (req.history or [])])
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    if req.system is not None:
        transcript.set_system_turn(req.system)
    transcript.add_user_turn(req.message)

    try:
        text = session.send_conversation(
            transcript,
            model=req.model,
            temperature=req.temperature,
            max_tokens=req.max_tokens,
        )
    except InvalidTranscriptError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except CompletionError as e:
        raise HTTPException(status_code=502, detail=_failure_detail(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return ChatPayload(text=text, model=req.model or session.default_model, engine=session.engine)

# ------------------------------------------------------------
# 🧭 Health checks
# ------------------------------------------------------------
@app.get("/healthz")
def healthz():
    settings = get_settings()
    return {
        "ok": True,
        "env": settings.ENV,
        "debug": settings.DEBUG,
        "app": settings.APP_NAME,
    }

@app.get("/health")
def health():
    return {"status": "ok", "env": get_settings().ENV}

@app.get("/")
def hello():
    return {"message": "Chat client service running."}
