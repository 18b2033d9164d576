import logging


def test_request_log_carries_user_and_boutique(client, gestionnaire, gestionnaire_headers, boutique_a, caplog):
    caplog.set_level(logging.INFO, logger="boutique_manager.core.middleware")

    client.get("/api/v1/categories", headers=gestionnaire_headers)

    line = next(r.getMessage() for r in caplog.records if "/api/v1/categories" in r.getMessage())
    assert f"User: {gestionnaire.id}" in line
    assert f"Boutique: {boutique_a.id}" in line
    assert "Status: 200" in line


def test_anonymous_request_is_logged(client, caplog):
    caplog.set_level(logging.INFO, logger="boutique_manager.core.middleware")

    client.get("/health")

    line = next(r.getMessage() for r in caplog.records if "/health" in r.getMessage())
    assert "User: - - Boutique: *" in line
