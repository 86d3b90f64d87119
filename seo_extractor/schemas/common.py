from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    name: str
    version: str
    git_sha: str


class VersionResponse(BaseModel):
    name: str
    version: str
    git_sha: str
