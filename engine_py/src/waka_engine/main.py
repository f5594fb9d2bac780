"""FastAPI main application for the waka draft backend"""

import logging
from fastapi import FastAPI, WebSocket
from fastapi.middleware.cors import CORSMiddleware

from .serialization import serialize_entries
from .websocket_server import game_manager

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(title="Waka Draft API", version="1.0.0")

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
async def root():
    return {"message": "Waka Draft API", "version": "1.0.0"}

@app.get("/health")
async def health_check():
    return game_manager.health()

@app.get("/history")
async def history():
    return serialize_entries(game_manager.session.history.fetch())

@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    await game_manager.handle_websocket(websocket)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=3000)
