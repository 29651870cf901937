# main.py

from stockmarket.config import settings
from stockmarket.main import app

# Run the app with Uvicorn when executed directly
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
