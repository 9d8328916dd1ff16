"""Allow ``python -m authz_service``."""

from authz_service.cli.main import main

main()
