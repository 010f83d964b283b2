# pos_register/main.py
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

load_dotenv()

from pos_register.config import settings
from pos_register.routes.register import router as register_router
from pos_register.schemas.purchase import StationContext
from pos_register.session import RegisterSession
from pos_register.utils.api_client import product_lookup_client, purchase_client

logging.basicConfig(level=settings.LOG_LEVEL)

app = FastAPI(title="POS Register API", version="1.0.0")

# CORS Configuration (the register UI runs on its own dev server)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# The register this process drives
app.state.register_session = RegisterSession(
    product_lookup_client,
    purchase_client,
    StationContext(
        employee_code=settings.EMPLOYEE_CODE,
        store_code=settings.STORE_CODE,
        register_no=settings.REGISTER_NO,
    ),
)

app.include_router(register_router)

@app.get("/health")
def health():
    return {"status": "ok"}
