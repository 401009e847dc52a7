"""Interface codegen driver."""

from monolink.codegen.driver import (
    generate_all_stubs,
    generate_client_stub,
    generate_server_stub,
    run_generator,
)

__all__ = ["generate_all_stubs", "generate_client_stub", "generate_server_stub", "run_generator"]
