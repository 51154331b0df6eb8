"""
Application configuration
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""
    
    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8080
    API_TITLE: str = "npm packager API"
    API_VERSION: str = "0.1.0"
    
    # External toolchain (resolved on PATH)
    PACKAGER_NPM_BIN: str = "npm"
    PACKAGER_NPX_BIN: str = "npx"
    PACKAGER_TSC_BIN: str = "tsc"
    
    # Relative srcDir / outDir / root assets of API builds resolve here
    PACKAGER_WORKSPACE: str = "."
    
    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
