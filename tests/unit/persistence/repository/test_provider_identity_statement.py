"""Unit tests for the provider identity SQL statement."""

from sqlalchemy.dialects import postgresql

from passage.domain.value import ProviderIdentityQuery
from passage.persistence.repository.user import provider_identity_statement


def compile_for_postgres(query: ProviderIdentityQuery):
    return provider_identity_statement(query).compile(dialect=postgresql.dialect())


class TestProviderIdentityStatement:
    """Tests for provider_identity_statement()."""

    def test_matches_primary_or_additional_by_containment(self):
        """Statement should OR the primary and additional JSONB lookups."""
        # Arrange
        query = ProviderIdentityQuery(
            provider="github", identifier_field="id", identifier=42
        )

        # Act
        compiled = compile_for_postgres(query)

        # Assert
        sql = " ".join(str(compiled).split())
        assert "users.provider = " in sql
        assert "users.provider_data @> " in sql
        assert "users.additional_providers_data @> " in sql
        assert " OR " in sql
        assert " AND " in sql

        params = list(compiled.params.values())
        assert "github" in params
        assert {"id": 42} in params
        assert {"github": {"id": 42}} in params

    def test_identifier_keeps_its_json_type(self):
        """String identifiers are bound as strings, not coerced."""
        query = ProviderIdentityQuery(
            provider="github", identifier_field="id", identifier="42"
        )

        params = list(compile_for_postgres(query).params.values())

        assert {"id": "42"} in params
        assert {"github": {"id": "42"}} in params
