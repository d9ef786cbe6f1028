from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from urllib.parse import parse_qsl
import uuid

app = FastAPI(title="Mock Stripe Server", version="1.0.0")

DECLINED_TOKEN = "tok_chargeDeclined"

# payment method id -> wallet token
payment_methods: dict[str, str] = {}


def error(status: int, message: str, code: str):
    return JSONResponse(status_code=status, content={"error": {"message": message, "code": code}})


async def form(request: Request) -> dict[str, str]:
    return dict(parse_qsl((await request.body()).decode()))


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:14]}"


@app.middleware("http")
async def require_key(request: Request, call_next):
    if request.url.path.startswith("/v1/") and not request.headers.get("authorization", "").startswith("Bearer sk_"):
        return error(401, "Invalid API Key provided", "api_key_invalid")
    return await call_next(request)


@app.get("/health")
def health(): return {"status": "ok"}


@app.post("/v1/payment_methods")
async def create_payment_method(request: Request):
    params = await form(request)
    token = params.get("card[token]")
    if params.get("type") != "card" or not token:
        return error(400, "Missing required param: card[token].", "parameter_missing")
    pm_id = new_id("pm")
    payment_methods[pm_id] = token
    return {"id": pm_id, "object": "payment_method", "type": "card"}


@app.post("/v1/customers")
async def create_customer(request: Request):
    params = await form(request)
    pm_id = params.get("payment_method")
    if pm_id not in payment_methods:
        return error(400, f"No such PaymentMethod: '{pm_id}'", "resource_missing")
    if payment_methods[pm_id] == DECLINED_TOKEN:
        return error(402, "card_declined", "card_declined")
    return {
        "id": new_id("cus"),
        "object": "customer",
        "email": params.get("email"),
        "invoice_settings": {"default_payment_method": params.get("invoice_settings[default_payment_method]")},
    }


@app.post("/v1/subscriptions")
async def create_subscription(request: Request):
    params = await form(request)
    if not params.get("customer") or not params.get("items[0][price]"):
        return error(400, "Missing required param: customer or items.", "parameter_missing")
    return {
        "id": new_id("sub"),
        "object": "subscription",
        "customer": params["customer"],
        "status": "active",
        "items": {"data": [{"price": {"id": params["items[0][price]"]}}]},
    }
