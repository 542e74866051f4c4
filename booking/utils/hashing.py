import hashlib, json
from pydantic import BaseModel

def payload_hash(payload: dict | BaseModel) -> str:
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json")
    s = json.dumps(payload, sort_keys=True, default=str)
    return hashlib.sha256(s.encode()).hexdigest()
