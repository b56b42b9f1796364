from passlib.hash import pbkdf2_sha256

def hash_password(p: str) -> str:
    return pbkdf2_sha256.hash(p)

def verify_password(p: str, hash: str) -> bool:
    if not hash:
        return False
    return pbkdf2_sha256.verify(p, hash)
