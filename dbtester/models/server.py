"""
ServerConfig model for the database server an ephemeral test database is created on.
"""

from pydantic import BaseModel, Field, conint, constr


class ServerConfig(BaseModel):
    """
    Connection parameters for a database server, without any database name.

    Attributes:
        host: Server network address
        port: Server port
        user: Administrative user (needs CREATE/DROP DATABASE privileges)
        password: Administrative password; empty means no-password authentication
    """

    host: constr(strip_whitespace=True, min_length=1) = Field(..., description="Server network address")
    port: conint(ge=1, le=65535) = Field(..., description="Server port")
    user: constr(min_length=1) = Field(..., description="Administrative user")
    password: str = Field("", description="Administrative password")

    def masked(self) -> dict:
        """
        Convert config to a dictionary safe for logging.

        Returns:
            Dictionary with the password replaced by asterisks
        """
        data = self.model_dump()
        if data["password"]:
            data["password"] = "***"
        return data
