"""Complaint Portal Service - HTTP API."""
import time
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, StrictInt, StrictStr, field_validator
from bson import ObjectId

from complaintportal import config
from complaintportal.services.complaint import ComplaintService, InvalidIdError
from complaintportal.services.db import NotFoundError, PortalDatabase, StorageError
from complaintportal.services.users import UserService
from complaintportal.utils.logger import ServiceLogger
from complaintportal.utils.metrics import MetricsCollector


class RegisterRequest(BaseModel):
    name: StrictStr
    email: StrictStr


class SubmitComplaintRequest(BaseModel):
    title: StrictStr
    summary: StrictStr
    # BSON stores integers as signed 64-bit
    rating: StrictInt = Field(ge=-2**63, le=2**63 - 1)
    userId: StrictStr

    @field_validator("userId")
    @classmethod
    def check_user_id(cls, v: str) -> str:
        if not ObjectId.is_valid(v):
            raise ValueError("userId must be a 24-character hex identifier")
        return v


class UserResponse(BaseModel):
    id: str
    secretCode: str
    name: str
    email: str
    complaints: List[str]


class ComplaintResponse(BaseModel):
    id: str
    title: str
    summary: str
    rating: int
    resolved: bool
    userId: Optional[str]


def _elapsed_ms(start_time: float) -> float:
    return (time.time() - start_time) * 1000


def create_app(db: PortalDatabase, atomic_append: Optional[bool] = None) -> FastAPI:
    """Build the portal app around an explicitly provided database gateway."""
    if atomic_append is None:
        atomic_append = config.ATOMIC_COMPLAINT_APPEND

    app = FastAPI(title="Complaint Portal Service")
    logger = ServiceLogger(config.SERVICE_NAME)
    metrics = MetricsCollector(config.SERVICE_NAME)
    user_svc = UserService(db, logger, atomic_append=atomic_append)
    complaint_svc = ComplaintService(db, user_svc, logger)

    app.state.db = db
    app.state.logger = logger
    app.state.metrics = metrics

    @app.exception_handler(RequestValidationError)
    def malformed_request(request: Request, exc: RequestValidationError):
        metrics.increment("bad_requests")
        logger.warning(f"Malformed request to {request.url.path}")
        return JSONResponse(status_code=400, content={"detail": "Malformed request body"})

    @app.exception_handler(InvalidIdError)
    def invalid_id(request: Request, exc: InvalidIdError):
        metrics.increment("bad_requests")
        return JSONResponse(status_code=400, content={"detail": "Invalid complaint ID"})

    @app.exception_handler(NotFoundError)
    def not_found(request: Request, exc: NotFoundError):
        metrics.increment("not_found")
        logger.debug(f"{request.url.path}: {exc}")
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(StorageError)
    def storage_failure(request: Request, exc: StorageError):
        metrics.increment("storage_errors")
        logger.error(f"Storage failure on {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    @app.get("/login", response_model=UserResponse)
    def login(secretCode: str = ""):
        metrics.increment("logins")
        user = user_svc.login(secretCode)
        return UserResponse(**user.dictify())

    @app.post("/register", response_model=UserResponse)
    def register(req: RegisterRequest):
        start_time = time.time()
        user = user_svc.register(req.name, req.email)
        metrics.increment("users_registered")
        metrics.timing("register_duration", _elapsed_ms(start_time))
        return UserResponse(**user.dictify())

    @app.post("/submitComplaint", response_model=ComplaintResponse)
    def submit_complaint(req: SubmitComplaintRequest):
        start_time = time.time()
        c = complaint_svc.submit(req.title, req.summary, req.rating, ObjectId(req.userId))
        metrics.increment("complaints_submitted")
        metrics.gauge("last_complaint_rating", req.rating)
        metrics.timing("submit_duration", _elapsed_ms(start_time))
        return ComplaintResponse(**c.dictify())

    @app.get("/getAllComplaintsForUser", response_model=List[ComplaintResponse])
    def complaints_for_user(secretCode: str = ""):
        start_time = time.time()
        complaints = complaint_svc.list_for_user(secretCode)
        metrics.timing("list_for_user_duration", _elapsed_ms(start_time))
        logger.debug(f"Listed {len(complaints)} complaints for user", count=len(complaints))
        return [ComplaintResponse(**c.dictify()) for c in complaints]

    @app.get("/getAllComplaintsForAdmin", response_model=List[ComplaintResponse])
    def complaints_for_admin():
        start_time = time.time()
        complaints = complaint_svc.list_all()
        metrics.timing("list_all_duration", _elapsed_ms(start_time))
        metrics.gauge("complaints_listed", len(complaints))
        return [ComplaintResponse(**c.dictify()) for c in complaints]

    @app.get("/viewComplaint", response_model=ComplaintResponse)
    def view_complaint(complaintId: str = ""):
        return ComplaintResponse(**complaint_svc.view(complaintId).dictify())

    @app.post("/resolveComplaint", response_model=ComplaintResponse)
    def resolve_complaint(complaintId: str = ""):
        c = complaint_svc.resolve(complaintId)
        metrics.increment("complaints_resolved")
        return ComplaintResponse(**c.dictify())

    @app.get("/health")
    def health():
        return {"status": "ok", "service": config.SERVICE_NAME}

    @app.get("/logs")
    def get_logs(limit: int = 100):
        """Get recent logs from this service."""
        return logger.get_recent_logs(limit=limit)

    @app.get("/metrics")
    def get_metrics(period: Optional[int] = None):
        """Get metrics from this service."""
        return metrics.get_all_metrics(time_period_minutes=period)

    return app


# MongoClient connects lazily, so building the app does not touch the network
app = create_app(PortalDatabase.from_uri(config.MONGO_URI, config.MONGO_DB_NAME, config.MONGO_TIMEOUT_MS))


if __name__ == "__main__":
    import uvicorn

    db = app.state.db
    db.ping()
    try:
        uvicorn.run(app, host="0.0.0.0", port=config.PORT)
    finally:
        db.close()
