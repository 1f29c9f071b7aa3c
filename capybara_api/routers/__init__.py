"""
FastAPI routers for the Capybara API.

Each module exposes an APIRouter that the application factory includes.
"""
