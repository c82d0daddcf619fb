import secrets
import time


def closet_image_key(user_id: str, ext: str = "jpg") -> str:
    return f"{user_id}/{int(time.time() * 1000)}-{secrets.token_hex(6)}.{ext}"
