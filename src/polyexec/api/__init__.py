"""
Expose the FastAPI application instance.

Importing this module will create a FastAPI application and register
all routes.  The service can be started with Uvicorn through the
package's ``-m`` invocation:

```sh
python -m polyexec.api
```
"""

from .main import app

__all__ = ["app"]
