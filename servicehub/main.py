"""ServiceHub - customer frontend for the service marketplace"""

import logging
import os

from fastapi import Depends, FastAPI, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from . import config
from .auth import (create_session_token, dump_filters, dump_flash, get_session_from_token,
                   load_filters, load_flash)
from .directory.client import DirectoryClient
from .directory.errors import DirectoryError, RemoteServiceError
from .models import AuthSession
from .views.booking import BookingForm
from .views.capabilities import FlashNotifier, MemoryFilterStore, RedirectNavigator
from .views.provider_detail import ProviderDetailView, threadpool_fetcher
from .views.search_bar import SearchBar
from .views.search_page import SearchResultsPage

logger = logging.getLogger(__name__)

app = FastAPI(title="ServiceHub", description="Find and book local service providers")

templates = Jinja2Templates(directory=os.path.join(os.path.dirname(__file__), "templates"))
app.mount("/static", StaticFiles(directory=os.path.join(os.path.dirname(__file__), "static")), name="static")

_client = DirectoryClient()


def get_client() -> DirectoryClient:
    return _client


def get_session(request: Request) -> AuthSession:
    return get_session_from_token(request.cookies.get("session"))


def _set_cookie(response, key: str, value: str):
    response.set_cookie(key, value, httponly=True, max_age=config.SESSION_MAX_AGE)


# ---- Search ----

def _render_search(request: Request, session: AuthSession, store: MemoryFilterStore, page: SearchResultsPage):
    return templates.TemplateResponse(request, "index.html", {
        "session": session, "filters": store.filters, "notices": load_flash(request.cookies.get("flash")),
        **page.context(),
    })


@app.get("/", response_class=HTMLResponse)
@app.get(config.SERVICES_PATH, response_class=HTMLResponse)
def index(request: Request, client: DirectoryClient = Depends(get_client),
          session: AuthSession = Depends(get_session)):
    store = MemoryFilterStore(load_filters(request.cookies.get("filters")))
    response = _render_search(request, session, store, SearchResultsPage(client))
    response.delete_cookie("flash")
    return response


@app.post("/search", response_class=HTMLResponse)
def search(request: Request, search: str = Form(""), location: str = Form(""),
           client: DirectoryClient = Depends(get_client), session: AuthSession = Depends(get_session)):
    store = MemoryFilterStore(load_filters(request.cookies.get("filters")))
    page = SearchResultsPage(client)
    SearchBar(store, page.on_search).submit(location=location, service=search)

    response = _render_search(request, session, store, page)
    _set_cookie(response, "filters", dump_filters(store.filters))
    return response


# ---- Provider Detail ----

async def _load_detail(username: str, client: DirectoryClient, session: AuthSession):
    notifier = FlashNotifier()
    navigator = RedirectNavigator()
    view = ProviderDetailView(threadpool_fetcher(client), session, notifier, navigator)
    await view.set_username(username.strip() or None)
    return view, notifier, navigator


def _render_detail(request: Request, view: ProviderDetailView, notifier: FlashNotifier,
                   session: AuthSession, booking_error: str | None = None, form: dict | None = None):
    kind = view.state.kind
    if kind == "not_found":
        status_code = 404
    elif kind == "error":
        status_code = 502 if view.username else 400
    else:
        status_code = 200
    return templates.TemplateResponse(request, "provider_detail.html", {
        **view.context(), "session": session, "notices": notifier.messages,
        "booking_error": booking_error, "form": form or {},
    }, status_code=status_code)


@app.get(config.SERVICES_PATH + "/{username}", response_class=HTMLResponse)
async def provider_detail(request: Request, username: str, client: DirectoryClient = Depends(get_client),
                          session: AuthSession = Depends(get_session)):
    view, notifier, _ = await _load_detail(username, client, session)
    return _render_detail(request, view, notifier, session)


@app.post(config.SERVICES_PATH + "/{username}/book", response_class=HTMLResponse)
async def open_booking(request: Request, username: str, client: DirectoryClient = Depends(get_client),
                       session: AuthSession = Depends(get_session)):
    view, notifier, _ = await _load_detail(username, client, session)
    view.open_booking()
    return _render_detail(request, view, notifier, session)


@app.post(config.SERVICES_PATH + "/{username}/book/confirm", response_class=HTMLResponse)
async def confirm_booking(request: Request, username: str, booking_date: str = Form(""),
                          address: str = Form(""), notes: str = Form(""),
                          client: DirectoryClient = Depends(get_client),
                          session: AuthSession = Depends(get_session)):
    view, notifier, navigator = await _load_detail(username, client, session)
    if not view.open_booking():
        return _render_detail(request, view, notifier, session)

    profile = view.profile
    form = BookingForm(
        initial_provider_id=profile.username,
        on_service_booked=view.handle_booking_success,
        client=client,
        session=session,
        service_id=profile.service.service_id if profile.service else None,
    )
    values = {"booking_date": booking_date, "address": address, "notes": notes}
    try:
        await form.submit(booking_date, address, notes)
    except ValidationError:
        return _render_detail(request, view, notifier, session,
                              booking_error="Please fill in the booking date and address.", form=values)
    except RemoteServiceError as e:
        return _render_detail(request, view, notifier, session,
                              booking_error=f"Booking failed: {e.message}.", form=values)
    except DirectoryError as e:
        logger.error(f"Booking {username} failed: {e}")
        return _render_detail(request, view, notifier, session,
                              booking_error="Booking failed. Please try again.", form=values)

    response = RedirectResponse(navigator.location or config.CUSTOMER_DASHBOARD_PATH, status_code=303)
    _set_cookie(response, "flash", dump_flash(notifier.messages))
    return response


# ---- Customer Dashboard ----

@app.get(config.CUSTOMER_DASHBOARD_PATH, response_class=HTMLResponse)
async def customer_dashboard(request: Request, session: AuthSession = Depends(get_session)):
    if not session.is_authenticated:
        return RedirectResponse("/login", status_code=303)
    response = templates.TemplateResponse(request, "customer_dashboard.html", {
        "session": session, "notices": load_flash(request.cookies.get("flash")),
    })
    response.delete_cookie("flash")
    return response


# ---- Login/Logout ----

@app.get("/login", response_class=HTMLResponse)
async def login_form(request: Request, next: str = config.SERVICES_PATH):
    return templates.TemplateResponse(request, "login.html", {
        "session": AuthSession(), "error": None, "next": next, "notices": [],
    })


@app.post("/login", response_class=HTMLResponse)
def login(request: Request, username: str = Form(...), password: str = Form(...),
          next: str = Form(config.SERVICES_PATH), client: DirectoryClient = Depends(get_client)):
    # Only same-site paths are followed after login
    if not next.startswith("/") or next.startswith("//"):
        next = config.SERVICES_PATH
    try:
        user = client.login(username, password)
    except RemoteServiceError as e:
        error = e.message
    except DirectoryError:
        error = "Login is unavailable right now. Please try again."
    else:
        response = RedirectResponse(next, status_code=303)
        _set_cookie(response, "session", create_session_token(user))
        return response
    return templates.TemplateResponse(request, "login.html", {
        "session": AuthSession(), "error": error, "next": next, "notices": [],
    }, status_code=401)


@app.get("/logout")
async def logout():
    response = RedirectResponse("/", status_code=303)
    response.delete_cookie("session")
    return response


@app.get("/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    uvicorn.run("servicehub.main:app", host="0.0.0.0", port=8000, reload=True)
