import asyncio
import json
from fastapi import FastAPI, Header, HTTPException

app = FastAPI(title="Mock Insights Server", version="1.0.0")

REPLY = {
    "summary": "You are living within your means this month.",
    "highlights": ["Free cash flow is positive", "Dining is your largest expense"],
    "recommendations": ["Move part of the surplus into savings"],
    "trend": "improving",
}

# The API key picks the scenario so e2e tests can exercise every failure path
SCENARIOS = {"mock-ok", "mock-fenced", "mock-malformed", "mock-unauthorized", "mock-ratelimit", "mock-down", "mock-slow"}


def _message(text: str) -> dict:
    return {"id": "msg_mock", "type": "message", "role": "assistant", "content": [{"type": "text", "text": text}]}


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/v1/messages")
async def messages(body: dict, x_api_key: str = Header(...)):
    if x_api_key not in SCENARIOS or x_api_key == "mock-unauthorized":
        raise HTTPException(status_code=401, detail="invalid x-api-key")
    if x_api_key == "mock-ratelimit":
        raise HTTPException(status_code=429, detail="rate limited")
    if x_api_key == "mock-down":
        raise HTTPException(status_code=529, detail="overloaded")
    if x_api_key == "mock-slow":
        await asyncio.sleep(30)
    if x_api_key == "mock-malformed":
        return _message("Sorry, I cannot help with that.")
    if x_api_key == "mock-fenced":
        return _message("Here is the analysis:\n```json\n" + json.dumps(REPLY) + "\n```")
    return _message(json.dumps(REPLY))
