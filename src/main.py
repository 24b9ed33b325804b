"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api import admin, auth, food_items, ingredients, plans, recipes, users
from src.config import get_settings

settings = get_settings()

app = FastAPI(
    title="Meal Planner API",
    description="Recipes, weekly meal plans and shopping lists with nutrition tracking",
    version="0.1.0",
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://localhost:4200",
            "http://localhost:5173",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Register routers
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(ingredients.router)
app.include_router(food_items.router)
app.include_router(recipes.router)
app.include_router(plans.router)
app.include_router(admin.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
