"""
Pydantic Schemas — Request & Response models for API validation.
Wire format is camelCase; Python attributes stay snake_case.
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ──────────────── Auth ────────────────

class LoginRequest(CamelModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserOut(CamelModel):
    user_id: str
    username: str
    email: str
    full_name: str
    role: str
    is_active: bool = True
    last_login_at: Optional[datetime] = None


class LoginResponse(CamelModel):
    token: str
    refresh_token: str
    expires_at: datetime
    user: UserOut


class MessageResponse(CamelModel):
    message: str


# ──────────────── Verification ────────────────

class ClientSearchResult(CamelModel):
    """Projection of a source record returned to the UI."""
    client_id: str
    id_type: str
    id_number: str
    full_name: str
    date_of_birth: Optional[datetime] = None
    gender: str = ""
    mobile_number: str = ""
    province: str = ""
    district: str = ""
    postal_code: str = ""
    source: str
    is_verified: bool = True


class SourceSearchResultOut(CamelModel):
    source_name: str
    display_name: str
    status: str
    response_time: int = 0
    is_found: bool = False
    result: Optional[ClientSearchResult] = None
    error_message: Optional[str] = None
    priority: int


class MultiSourceVerificationResponse(CamelModel):
    success: bool
    id_number: str
    source_results: List[SourceSearchResultOut] = []
    final_result: Optional[ClientSearchResult] = None
    total_response_time: int = 0
    overall_status: str


class VerificationResponse(CamelModel):
    success: bool
    status: str
    result_count: int
    response_time: int
    source: str
    results: List[ClientSearchResult] = []
    error_message: Optional[str] = None


class AvailableTestId(CamelModel):
    id_number: str
    full_name: str
    source: str
    display_source: str


# ──────────────── Products ────────────────

class ProductOut(CamelModel):
    product_id: str
    product_code: str
    product_name: str
    category: str
    description: Optional[str] = None
    premium_amount: float
    currency: str
    is_active: bool
    created_at: Optional[datetime] = None


class AttachProductRequest(CamelModel):
    registration_id: str
    product_id: str
    custom_premium_amount: Optional[float] = Field(None, ge=0)
    start_date: datetime
    end_date: Optional[datetime] = None
    notes: Optional[str] = None


class ClientProductOut(CamelModel):
    client_product_id: str
    registration_id: str
    product_id: str
    product: ProductOut
    enrollment_date: Optional[datetime] = None
    status: str
    premium_amount: float
    policy_number: str
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    notes: Optional[str] = None


class UpdateClientProductRequest(CamelModel):
    status: str = Field(..., description="Active | Lapsed | Cancelled")
    premium_amount: Optional[float] = Field(None, ge=0)
    end_date: Optional[datetime] = None
    notes: Optional[str] = None


# ──────────────── Clients ────────────────

class RegisterClientRequest(CamelModel):
    client_id: Optional[str] = None    # Source record found during verification
    id_number: str = Field(..., min_length=1)
    full_name: str = Field(..., min_length=1)
    date_of_birth: datetime
    gender: str
    mobile_number: str
    email: str
    province: str
    district: str
    postal_code: str = ""
    notes: Optional[str] = None
    product_ids: List[str] = []


class UpdateClientRequest(CamelModel):
    full_name: str = Field(..., min_length=1)
    mobile_number: str
    email: str
    province: str
    district: str
    postal_code: str = ""
    status: str = Field(..., description="Active | Pending | Suspended")
    notes: Optional[str] = None


class ClientDetails(CamelModel):
    registration_id: str
    client_id: Optional[str] = None
    id_number: str
    full_name: str
    date_of_birth: Optional[datetime] = None
    gender: str = ""
    mobile_number: str = ""
    email: str = ""
    province: str = ""
    district: str = ""
    postal_code: str = ""
    status: str
    registration_date: Optional[datetime] = None
    notes: Optional[str] = None
    registered_by: Optional[UserOut] = None
    products: List[ClientProductOut] = []


class EposAddress(BaseModel):
    province: str = ""
    district: str = ""
    postal_code: str = ""


class EposProduct(CamelModel):
    product_id: str
    product_name: str
    product_code: str
    premium_amount: float
    policy_number: str
    status: str


class EposPayload(BaseModel):
    """Point-of-sale hand-off document; keys are snake_case by contract."""
    id_type: str = ""
    id_number: str = ""
    full_name: str = ""
    date_of_birth: str = ""
    gender: str = ""
    mobile_number: str = ""
    address: EposAddress = EposAddress()
    source: str = ""
    captured_by: str = "EPOS-DB"
    capture_timestamp: str = ""
    products: Optional[List[EposProduct]] = None


class ClientRegistrationResponse(CamelModel):
    success: bool
    message: str
    registration_id: Optional[str] = None
    client: Optional[ClientDetails] = None
    epos_payload: EposPayload = EposPayload()


# ──────────────── Dashboard / Reports ────────────────

class ActivityLogEntry(CamelModel):
    id: str
    action: str
    description: str
    timestamp: str
    user_id: str
    user_name: str


class DashboardStats(CamelModel):
    total_clients: int
    total_verifications: int
    total_products: int
    today_registrations: int
    successful_verifications: int
    failed_verifications: int
    success_rate: float
    avg_response_time: float
    recent_activity: List[ActivityLogEntry] = []


class ClientReportRow(CamelModel):
    registration_id: str
    id_number: str
    full_name: str
    email: str
    mobile_number: str
    province: str
    status: str
    registration_date: Optional[datetime] = None
    product_count: int
    total_premium: float
    registered_by: str


class VerificationSourceStat(CamelModel):
    source: str
    count: int
    percentage: float


class ProvinceStat(CamelModel):
    province: str
    client_count: int
    total_premium: float


class ProductCategoryStat(CamelModel):
    category: str
    product_count: int
    enrollment_count: int
    total_premium: float


class RegistrationTrend(CamelModel):
    date: str
    registration_count: int
    revenue: float


class DashboardStatistics(CamelModel):
    total_clients: int
    today_registrations: int
    total_verifications: int
    today_verifications: int
    total_products: int
    active_products: int
    average_response_time: float
    success_rate: float
    top_verification_sources: List[VerificationSourceStat] = []
    province_stats: List[ProvinceStat] = []
    category_stats: List[ProductCategoryStat] = []
    registration_trends: List[RegistrationTrend] = []


# ──────────────── Generic ────────────────

class HealthResponse(BaseModel):
    status: str
    database: str
    version: str
    uptime_seconds: float
