from datetime import date

from pydantic import BaseModel, EmailStr, Field


class WaitlistIn(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str
    plan: str


class LeadRecord(BaseModel):
    """One spreadsheet row. Written once, never updated."""

    name: str
    email: str
    phone: str
    plan: str
    submitted_date: date

    def to_row(self) -> list[str]:
        return [
            self.name,
            self.email,
            self.phone,
            self.plan,
            self.submitted_date.strftime("%d/%m/%Y"),
        ]


class WaitlistOut(BaseModel):
    message: str = "Success"
