"""Registration, login, token refresh and the bearer-token dependency."""
