from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from quizroom.core.config import settings
from quizroom.core.errors import QuizRoomError, Unauthorized
from quizroom.core.logging_config import configure_logging
from quizroom.routes.auth.auth_routers import auth_router
from quizroom.routes.quiz.participant_routers import participant_router
from quizroom.routes.quiz.question_routers import question_router
from quizroom.routes.quiz.quiz_routers import quiz_router
from quizroom.routes.quiz.submission_routers import submission_router
from quizroom.routes.user.user_routers import user_router

configure_logging()

app = FastAPI(title="QuizRoom API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()] or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(quiz_router)
app.include_router(question_router)
app.include_router(participant_router)
app.include_router(submission_router)
app.include_router(user_router)


@app.exception_handler(QuizRoomError)
async def quizroom_error_handler(request: Request, exc: QuizRoomError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"kind": exc.kind, "detail": exc.message},
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Invalid request"
    return JSONResponse(
        status_code=422,
        content={"kind": "validation_error", "detail": message, "errors": jsonable_errors(errors)},
    )


def jsonable_errors(errors):
    return [{"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")} for e in errors]


@app.get("/api/health")
async def health():
    return {"ok": True}


@app.get("/", response_class=HTMLResponse)
async def read_root():
    return """
    <html>
        <head>
            <title>QuizRoom</title>
        </head>
        <body>
            <h1>QuizRoom API</h1>
            <p>See the API documentation <a href="/docs">here</a>.</p>
        </body>
    </html>
    """
