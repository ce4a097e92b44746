from fastapi import FastAPI, Request
from typing import Any, Dict, List

app = FastAPI(title="Mock Payout Server", version="1.0.0")
# Received events, newest last; inspect via GET /mock-payout
EVENTS: List[Dict[str, Any]] = []

@app.get("/health")
def health(): return {"status": "ok"}

@app.post("/mock-payout")
async def receive_event(request: Request):
    EVENTS.append(await request.json())
    return {"status": "accepted", "received": len(EVENTS)}

@app.get("/mock-payout")
def list_events(): return {"events": EVENTS}
