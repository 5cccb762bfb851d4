"""Types and schemas shared by the domain, runtime and CLI layers."""
