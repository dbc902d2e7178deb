import uvicorn
from video_drop.core.config import settings
from video_drop.main import create_app

# Create FastAPI application
app = create_app(settings)

if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT)
