import time, hmac, hashlib, base64, json
from passlib.hash import pbkdf2_sha256
from healthstore.config import settings

def hash_password(pw: str) -> str:
    return pbkdf2_sha256.hash(pw)

def verify_password(pw: str, hashed: str) -> bool:
    try:
        return pbkdf2_sha256.verify(pw, hashed)
    except ValueError:
        # malformed hash in the DB
        return False

def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode()

def _b64url_json(obj) -> str:
    return _b64url(json.dumps(obj, separators=(",", ":")).encode())

def _sign(signing_input: bytes) -> bytes:
    return hmac.new(settings.jwt_secret.encode(), signing_input, hashlib.sha256).digest()

def create_access_token(sub: str, ttl: int | None = None) -> str:
    ttl = settings.jwt_ttl_seconds if ttl is None else ttl
    header  = {"alg": settings.jwt_algo, "typ": "JWT"}
    payload = {"sub": sub, "exp": int(time.time()) + ttl}
    signing_input = f"{_b64url_json(header)}.{_b64url_json(payload)}".encode()
    return f"{signing_input.decode()}.{_b64url(_sign(signing_input))}"

def decode_token(token: str) -> dict:
    try:
        h, p, s = token.split(".")
        sig = base64.urlsafe_b64decode(s + "==")
        if not hmac.compare_digest(sig, _sign(f"{h}.{p}".encode())):
            raise ValueError("bad signature")
        payload = json.loads(base64.urlsafe_b64decode(p + "=="))
        if int(time.time()) >= payload.get("exp", 0):
            raise ValueError("expired")
        return payload
    except Exception as e:
        raise ValueError("invalid token") from e
