from typing import Optional
from pydantic import BaseModel


class RouteDecisionResponse(BaseModel):
    path: str
    state: str
    view: Optional[str]
    redirectTo: Optional[str]
