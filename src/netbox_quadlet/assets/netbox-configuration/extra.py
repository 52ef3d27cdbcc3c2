# Settings that are not taken from the environment.

# Peppers used to hash API tokens (NetBox >= 4.3 v2 tokens).
API_TOKEN_PEPPERS = {
    1: "{{API_TOKEN_PEPPER}}",
}

LOGIN_REQUIRED = True
