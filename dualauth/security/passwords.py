"""Password hashing."""

from werkzeug.security import generate_password_hash, check_password_hash


class PasswordHasher:
    """Salted, adaptive one-way hashing backed by werkzeug.

    ``method`` is passed through to ``generate_password_hash`` (``scrypt`` by
    default, ``pbkdf2:sha256[:iterations]`` also works). Hashes made with a
    different method still verify because the method is stored in the hash.
    """

    def __init__(self, method='scrypt'):
        self.method = method

    def hash(self, password):
        """Hash a plaintext password for storage."""
        return generate_password_hash(password, method=self.method)

    def verify(self, password, password_hash):
        """Check a plaintext password against a stored hash."""
        if not password or not password_hash:
            return False
        return check_password_hash(password_hash, password)
