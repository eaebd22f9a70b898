import logging
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import settings
from core.errors import AuthServiceError, ValidationFailure
from core.lifespan import lifespan
from routers import home, management, student
from routers.auth import user_general, token

logger = logging.getLogger(__name__)

app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL], # 교차-출처 요청을 보낼 수 있는 출처의 리스트
    allow_credentials=True, # 교차-출처 요청시 쿠키 지원 여부를 설정
    allow_methods=["*"], # 교차-출처 요청을 허용하는 HTTP 메소드의 리스트
    allow_headers=["*"], # 교차-출처를 지원하는 HTTP 요청 헤더의 리스트
)

@app.exception_handler(AuthServiceError)
async def auth_service_error_handler(request: Request, exc: AuthServiceError):
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error_code": exc.error_code, **exc.detail},
        headers=headers,
    )

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # 필수 필드 누락 등은 상태 변경 전에 400으로 거부한다
    logger.info(f"⚠️ 요청 검증 실패: {request.url.path}")
    failure = ValidationFailure(
        "Please provide all the required fields",
        detail={
            "errors": [
                {"loc": list(err.get("loc", ())), "msg": err.get("msg")}
                for err in exc.errors()
            ],
        },
    )
    return await auth_service_error_handler(request, failure)

# 라우터 연결
app.include_router(user_general.router)
app.include_router(token.router)
app.include_router(home.router)
app.include_router(management.router)
app.include_router(student.router)

@app.get("/")
def read_root():
    return {"message": "NET6JWT Token Service"}

if __name__ == "__main__":
    uvicorn.run("main:app",
                host="localhost",
                port=8000,
                reload=True)
