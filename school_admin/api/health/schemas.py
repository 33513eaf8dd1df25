from school_admin.core.schemas import ApiModel


class HealthResponse(ApiModel):
    status: str
    message: str
    store_connected: str  # "Yes" | "No"
    connection_state: str
