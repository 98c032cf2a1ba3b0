import re
from contextlib import asynccontextmanager
from datetime import date, datetime, timezone
from typing import Callable, Optional, Union

import structlog
from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from holiday_calendar import __version__
from holiday_calendar.config import Settings, get_settings
from holiday_calendar.logging_config import configure_logging
from holiday_calendar.models import (
    ApiResponse,
    BusinessDays,
    ErrorKind,
    HolidayCheck,
    HolidayError,
    HolidayList,
    NextHoliday,
    RegionList,
    ResponseMeta,
)
from holiday_calendar.services import CalendarStore, HolidayService

logger = structlog.get_logger()

VERSION = __version__
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Every expected engine failure is a client error
ERROR_STATUS = {
    ErrorKind.UNKNOWN_COUNTRY: 400,
    ErrorKind.YEAR_NOT_AVAILABLE: 400,
    ErrorKind.INVALID_RANGE: 400,
    ErrorKind.NO_UPCOMING_HOLIDAY: 400,
}


class BusinessDaysRequest(BaseModel):
    """Body of POST /api/businessdays."""
    country: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None
    state: Optional[str] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logger.info(
        "api_starting",
        countries=settings.supported_countries,
        data_dir=str(settings.data_dir),
    )
    yield
    logger.info("api_stopping")


def create_app(settings: Optional[Settings] = None, holiday_service: Optional[HolidayService] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings)

    if holiday_service is None:
        store = CalendarStore(settings.data_dir, settings.supported_countries)
        holiday_service = HolidayService(
            store,
            locale=settings.weekday_locale,
            max_range_days=settings.max_business_day_span,
        )

    app = FastAPI(
        title="DACH Holidays API",
        description="""
    REST API for public and regional holidays in Germany, Austria and Switzerland.

    ## Features

    - **Holidays**: All holidays of a year, optionally narrowed to a state/canton
    - **Date Check**: Is a given date a holiday
    - **Next Holiday**: The next upcoming holiday from today or a given date
    - **Business Days**: Business, weekend and holiday day counts for a date range
    - **States**: Region codes known for each country
    """,
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.holiday_service = holiday_service

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-API-Key"],
    )

    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    _register_routes(app)
    return app


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    content = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"error": "Invalid request parameters", "details": details})


def _service(request: Request) -> HolidayService:
    return request.app.state.holiday_service


def _require_country(request: Request, country: Optional[str], usage: Union[str, dict]) -> str:
    """Lower-case the country code and check it against the supported set."""
    if not country:
        raise HTTPException(
            status_code=400,
            detail={"error": "Missing required parameter: country", "usage": usage},
        )
    code = country.strip().lower()
    supported = request.app.state.settings.supported_countries
    if code not in supported:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid country code. Supported: {', '.join(supported)}",
        )
    return code


def _parse_date(value: str) -> date:
    """Parse a canonical YYYY-MM-DD date string."""
    if not DATE_PATTERN.match(value):
        raise HTTPException(status_code=400, detail="Invalid date format. Use YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format. Use YYYY-MM-DD") from None


def _respond(endpoint: str, query: Callable[[], Union[BaseModel, HolidayError]]) -> ApiResponse:
    """Run an engine query and wrap its outcome in the response envelope."""
    try:
        result = query()
    except Exception as e:
        logger.exception("request_failed", endpoint=endpoint)
        raise HTTPException(
            status_code=500,
            detail={"error": "Internal server error", "message": str(e)},
        )

    if isinstance(result, HolidayError):
        logger.info("query_rejected", endpoint=endpoint, kind=result.kind.value)
        raise HTTPException(status_code=ERROR_STATUS[result.kind], detail=result.message)

    return ApiResponse[type(result)](
        data=result,
        meta=ResponseMeta(
            requested_at=datetime.now(timezone.utc).isoformat(),
            endpoint=endpoint,
        ),
    )


def _register_routes(app: FastAPI) -> None:

    @app.get("/", tags=["Root"])
    async def root():
        """API root - provides basic info and links."""
        return {
            "name": "DACH Holidays API",
            "version": VERSION,
            "description": "REST API for holidays and business days in Germany, Austria and Switzerland",
            "endpoints": {
                "holidays": "/api/holidays",
                "is_holiday": "/api/is-holiday",
                "next_holiday": "/api/next-holiday",
                "business_days": "/api/businessdays",
                "states": "/api/states",
                "documentation": "/docs",
            },
            "current_year": datetime.now().year,
        }

    @app.get("/api/holidays", response_model=ApiResponse[HolidayList], tags=["Holidays"])
    def get_holidays(
        request: Request,
        country: Optional[str] = Query(default=None, description="Country code: de, at, ch"),
        year: Optional[int] = Query(default=None, description="Year to get holidays for. Defaults to current year."),
        state: Optional[str] = Query(default=None, description="State/canton code, e.g. BY"),
    ):
        """
        Get the holidays of a country for a specific year.

        If no year is provided, returns data for the current year.
        Without a state, regional holidays of every state are included.
        """
        code = _require_country(request, country, "GET /api/holidays?country=de&year=2025&state=BY")
        return _respond(
            "/api/holidays",
            lambda: _service(request).list_holidays(code, year, state or None),
        )

    @app.get("/api/is-holiday", response_model=ApiResponse[HolidayCheck], tags=["Date Check"])
    def check_date(
        request: Request,
        country: Optional[str] = Query(default=None),
        date_: Optional[str] = Query(default=None, alias="date", description="Date format: YYYY-MM-DD"),
        state: Optional[str] = Query(default=None),
    ):
        """
        Check if a specific date is a holiday.

        Dates outside the years covered by the data are reported as no holiday.
        """
        usage = "GET /api/is-holiday?country=de&date=2025-01-01&state=BY"
        if not country or not date_:
            raise HTTPException(
                status_code=400,
                detail={"error": "Missing required parameters: country, date", "usage": usage},
            )
        code = _require_country(request, country, usage)
        day = _parse_date(date_)
        return _respond(
            "/api/is-holiday",
            lambda: _service(request).is_holiday(code, day, state or None),
        )

    @app.get("/api/next-holiday", response_model=ApiResponse[NextHoliday], tags=["Holidays"])
    def get_next_holiday(
        request: Request,
        country: Optional[str] = Query(default=None),
        from_: Optional[str] = Query(default=None, alias="from", description="Defaults to today"),
        state: Optional[str] = Query(default=None),
    ):
        """Get the next holiday after today or after a given date."""
        code = _require_country(request, country, "GET /api/next-holiday?country=de&state=BY")
        from_date = _parse_date(from_) if from_ else None
        return _respond(
            "/api/next-holiday",
            lambda: _service(request).next_holiday(code, from_date, state or None),
        )

    @app.post("/api/businessdays", response_model=ApiResponse[BusinessDays], tags=["Business Days"])
    def calculate_business_days(request: Request, payload: Optional[BusinessDaysRequest] = None):
        """
        Count business days between two dates (both inclusive).

        Weekends are never business days; holidays on weekdays are excluded too.
        """
        payload = payload or BusinessDaysRequest()
        if not payload.country or not payload.start or not payload.end:
            raise HTTPException(
                status_code=400,
                detail={
                    "error": "Missing required fields: country, start, end",
                    "usage": {
                        "method": "POST",
                        "endpoint": "/api/businessdays",
                        "body": {
                            "country": "de",
                            "start": "2025-01-01",
                            "end": "2025-12-31",
                            "state": "BY (optional)",
                        },
                    },
                },
            )
        code = _require_country(request, payload.country, "POST /api/businessdays")
        start = _parse_date(payload.start)
        end = _parse_date(payload.end)
        return _respond(
            "/api/businessdays",
            lambda: _service(request).business_days(code, start, end, payload.state or None),
        )

    @app.get("/api/states", response_model=ApiResponse[RegionList], tags=["States"])
    def get_states(request: Request, country: Optional[str] = Query(default=None)):
        """Get the state/canton codes for a country."""
        code = _require_country(request, country, "GET /api/states?country=de")
        return _respond("/api/states", lambda: _service(request).get_regions(code))

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
        }


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
