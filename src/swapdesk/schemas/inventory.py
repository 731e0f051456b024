"""Customer and device API schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.domain import Customer, Device


class CustomerModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    customer_Id: Optional[str] = None
    first_name: str = ""
    last_name: str = ""
    name: str = ""
    email: str = ""
    phone: str = ""
    display_name: str = Field("", alias="displayName")

    @classmethod
    def from_domain(cls, customer: Customer) -> "CustomerModel":
        return cls(
            id=customer.id,
            customer_Id=customer.customer_Id,
            first_name=customer.first_name,
            last_name=customer.last_name,
            name=customer.name,
            email=customer.email,
            phone=customer.phone,
            display_name=customer.display_name,
        )


class DeviceModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    device_id: str = Field(..., alias="deviceId")
    status: str
    customer_id: Optional[str] = None
    model: Optional[str] = None
    type: Optional[str] = None
    iccid: Optional[str] = None
    imei: Optional[str] = None
    barcode: Optional[str] = None
    serial_number: Optional[str] = Field(None, alias="serialNumber")
    is_sim: bool = Field(False, alias="isSim")

    @classmethod
    def from_domain(cls, device: Device) -> "DeviceModel":
        return cls(
            id=device.id,
            device_id=device.device_id,
            status=device.status,
            customer_id=device.customer_id,
            model=device.model,
            type=device.type,
            iccid=device.iccid,
            imei=device.imei,
            barcode=device.barcode,
            serial_number=device.serial_number,
            is_sim=device.is_sim,
        )
