"""
Backend connection configuration.

The storefront talks to a single hosted relational backend. Its endpoint and
access key come from the environment; this module validates them once at
startup and returns a typed result instead of handing out a half-configured
connection.
"""
from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import urlparse, unquote

BACKEND_URL_VAR = 'BOTANIC_DB_URL'
BACKEND_KEY_VAR = 'BOTANIC_DB_KEY'

SUPPORTED_SCHEMES = {
    'postgres': 'django.db.backends.postgresql',
    'postgresql': 'django.db.backends.postgresql',
    'sqlite': 'django.db.backends.sqlite3',
}


@dataclass(frozen=True)
class BackendConfig:
    """Result of validating the backend connection variables"""
    url: Optional[str] = None
    key: Optional[str] = None
    engine: Optional[str] = None
    name: Optional[str] = None
    host: Optional[str] = None
    port: Optional[int] = None
    user: Optional[str] = None
    errors: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def database_settings(self) -> dict:
        """Build a Django DATABASES entry; only meaningful when valid"""
        if not self.is_valid:
            raise ValueError('Backend configuration is invalid: ' + '; '.join(self.errors))
        if self.engine == SUPPORTED_SCHEMES['sqlite']:
            return {'ENGINE': self.engine, 'NAME': self.name}
        return {
            'ENGINE': self.engine,
            'NAME': self.name,
            'USER': self.user or '',
            'PASSWORD': self.key,
            'HOST': self.host or '',
            'PORT': str(self.port) if self.port else '',
        }


def load_backend_config(environ) -> BackendConfig:
    """
    Validate the backend endpoint and access key.

    Args:
        environ: mapping of environment variables (usually os.environ)

    Returns:
        BackendConfig with parsed connection parts, or with `errors` set
        when a variable is missing or the endpoint cannot be used.
    """
    url = (environ.get(BACKEND_URL_VAR) or '').strip()
    key = (environ.get(BACKEND_KEY_VAR) or '').strip()

    errors = []
    if not url:
        errors.append(f'{BACKEND_URL_VAR} is not set')
    if not key:
        errors.append(f'{BACKEND_KEY_VAR} is not set')
    if not url:
        return BackendConfig(url=None, key=key or None, errors=errors)

    parsed = urlparse(url)
    engine = SUPPORTED_SCHEMES.get(parsed.scheme)
    if engine is None:
        errors.append(
            f'{BACKEND_URL_VAR} must use one of: {", ".join(sorted(SUPPORTED_SCHEMES))} '
            f'(got "{parsed.scheme or url}")'
        )
        return BackendConfig(url=url, key=key or None, errors=errors)

    if engine == SUPPORTED_SCHEMES['sqlite']:
        # sqlite:///relative.db or sqlite:////absolute/path.db
        name = parsed.path[1:] if parsed.path.startswith('/') else parsed.path
        if not name:
            errors.append(f'{BACKEND_URL_VAR} has no database file path')
        return BackendConfig(url=url, key=key or None, engine=engine, name=name or None, errors=errors)

    name = parsed.path.lstrip('/')
    if not parsed.hostname:
        errors.append(f'{BACKEND_URL_VAR} has no host')
    if not name:
        errors.append(f'{BACKEND_URL_VAR} has no database name')
    try:
        port = parsed.port
    except ValueError:
        errors.append(f'{BACKEND_URL_VAR} has an invalid port')
        port = None

    return BackendConfig(
        url=url,
        key=key or None,
        engine=engine,
        name=unquote(name) or None,
        host=parsed.hostname,
        port=port,
        user=unquote(parsed.username) if parsed.username else None,
        errors=errors,
    )
