"""Swap and collection workflow API schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from .inventory import CustomerModel, DeviceModel


class SearchRequest(BaseModel):
    term: str = ""


class SelectCustomerRequest(BaseModel):
    customer_id: str


class SelectDeviceRequest(BaseModel):
    device_id: str = Field(..., description="Internal id of one of the customer's assigned devices.")


class ScanRequest(BaseModel):
    scanned: str = Field(..., min_length=1, description="Raw text read from the barcode or QR code.")


class SwapSessionResponse(BaseModel):
    session_id: str
    step: str
    customer: Optional[CustomerModel] = None
    old_device: Optional[DeviceModel] = None
    new_device: Optional[DeviceModel] = None
    search_term: str = ""
    search_results: List[CustomerModel] = []
    customer_devices: List[DeviceModel] = []
    last_error: Optional[str] = None


class SwapRecordModel(BaseModel):
    id: Optional[int] = None
    Customer_ID: str
    Customer_Name: str
    admin_id: Union[int, str]
    Admin_Name: str
    Old_Device: str
    New_Device: str
    Date: str
    status: str


class CollectionLogModel(BaseModel):
    id: str
    timestamp: datetime
    message: str
    level: str
    details: Optional[str] = None


class CollectionSessionResponse(BaseModel):
    session_id: str
    agent: str
    router: Optional[DeviceModel] = None
    sim: Optional[DeviceModel] = None
    ready: bool
    log: List[CollectionLogModel] = []


class CollectionRecordModel(BaseModel):
    customer_id: str = Field(..., alias="Customer ID")
    full_name: str = Field(..., alias="Full Name")
    barcode: str = Field(..., alias="Barcode")
    sim: str = Field(..., alias="SIM")
    agent: str = Field(..., alias="Agent")
    province: str = Field(..., alias="Province")
    date: str = Field(..., alias="Date")
