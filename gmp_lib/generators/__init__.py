"""GMP request generators: each returns (command_xml, expected_root_tag)."""
