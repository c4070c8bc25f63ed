"""
Authentication Pydantic Schemas
"""

from pydantic import BaseModel, Field


class TokenResponse(BaseModel):
    """
    Response returned by the login endpoint.

    Include the access token in the Authorization header:
        Authorization: Bearer <access_token>
    """

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Always 'bearer'")
    expires_in: int = Field(..., description="Token lifetime in seconds")
