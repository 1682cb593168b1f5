"""longboard_cms — site CMS (pages dynamiques à blocs, page headers, admin)."""
