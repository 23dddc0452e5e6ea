from portfolio_sync.services.readme_service import (
    SUMMARY_HEADINGS,
    extract_abstract,
    extract_description,
    extract_first_image,
    extract_overview,
    extract_project_description,
    extract_section,
    extract_technologies,
    parse_readme,
    resolve_image_url,
)


class TestExtractSection:

    def test_extracts_abstract_until_next_heading(self):
        markdown = (
            "# Project Name\n\n## Abstract\n\n"
            "This is the abstract content that should be extracted.\n"
            "It can span multiple lines.\n\n"
            "**Key Features:**\n- Feature 1\n- Feature 2\n\n"
            "## Features\n\nSome features here."
        )
        result = extract_abstract(markdown)
        assert result.startswith("This is the abstract content that should be extracted.")
        assert "It can span multiple lines." in result
        assert "**Key Features:**" in result
        assert "- Feature 2" in result
        assert "## Features" not in result
        assert "Some features here" not in result

    def test_level_three_heading(self):
        markdown = "# Project\n\n### Abstract\n\nThis is the abstract content.\n\n## Next Section"
        assert extract_abstract(markdown) == "This is the abstract content."

    def test_stops_at_level_one_heading(self):
        markdown = "## Abstract\nBody text.\n# Appendix\nMore."
        assert extract_abstract(markdown) == "Body text."

    def test_level_four_heading_is_part_of_body(self):
        markdown = "## Overview\nIntro.\n#### Detail\nDeep.\n## Install"
        assert extract_overview(markdown) == "Intro.\n#### Detail\nDeep."

    def test_missing_heading_returns_empty_string(self):
        assert extract_abstract("# Project\n\n## Features\n\nSome features here.") == ""

    def test_empty_body_returns_empty_string(self):
        assert extract_abstract("# Project\n\n## Abstract\n\n## Features") == ""

    def test_heading_on_last_line_returns_empty_string(self):
        assert extract_abstract("# Project\n\n## Abstract") == ""

    def test_section_at_end_of_file(self):
        markdown = "# Project\n\n## Features\n\nSome features here.\n\n## Abstract\nThis is the abstract at the end of the file."
        assert extract_abstract(markdown) == "This is the abstract at the end of the file."

    def test_heading_match_is_case_insensitive(self):
        markdown = "# Project\n\n## overview\n\nThis is the overview content in lowercase.\n\n## Features"
        assert extract_overview(markdown) == "This is the overview content in lowercase."

    def test_heading_must_match_whole_name(self):
        markdown = "## Abstract Thoughts\nNot the abstract.\n"
        assert extract_abstract(markdown) == ""

    def test_project_description_heading(self):
        markdown = "# Project\n\n## Project Description\nProject description content at end of file"
        assert extract_project_description(markdown) == "Project description content at end of file"
        assert extract_description(markdown) == ""

    def test_description_heading_keeps_markdown_formatting(self):
        markdown = "## Description\n\nThis is **bold**.\n\n- Detail 1\n- Detail 2\n\n## Installation"
        assert extract_description(markdown) == "This is **bold**.\n\n- Detail 1\n- Detail 2"

    def test_windows_line_endings(self):
        markdown = "## Abstract\r\nWindows text.\r\n## Next\r\n"
        assert extract_abstract(markdown) == "Windows text."

    def test_priority_order_prefers_abstract(self):
        markdown = (
            "# Project\n\n## Overview\n\nThis is overview content.\n\n"
            "## Abstract\n\nThis is the abstract content."
        )
        assert extract_section(markdown, SUMMARY_HEADINGS) == "This is the abstract content."

    def test_priority_order_falls_through_to_next_name(self):
        markdown = "## Abstract\n\n## Description\nOnly a description."
        assert extract_section(markdown, SUMMARY_HEADINGS) == "Only a description."

    def test_accepts_single_name(self):
        assert extract_section("### Stack\nPython", "stack") == "Python"


class TestExtractFirstImage:

    def test_relative_markdown_image(self):
        assert extract_first_image("# Project\n\n![Project Image](./screenshot.png)\n\n## Abstract") == "./screenshot.png"

    def test_first_of_several_images(self):
        assert extract_first_image("![First](./image1.png)\n![Second](./image2.png)") == "./image1.png"

    def test_no_image_returns_none(self):
        assert extract_first_image("# Project\n\n## Abstract\n\nNo images here.") is None

    def test_html_img_wins_over_markdown_image(self):
        assert extract_first_image('<img src="a.png"/>\n![x](b.png)') == "a.png"

    def test_html_img_wins_even_when_later(self):
        markdown = '![x](b.png)\n\n<p align="center"><img alt="logo" src=\'logo.svg\' width="200"></p>'
        assert extract_first_image(markdown) == "logo.svg"

    def test_skips_images_in_fenced_code(self):
        assert extract_first_image("```\n![x](fake.png)\n```\n![y](real.png)") == "real.png"

    def test_only_fenced_images_returns_none(self):
        assert extract_first_image("```markdown\n![x](fake.png)\n```") is None

    def test_alt_text_with_quotes(self):
        assert extract_first_image("![Image with \"quotes\" and 'apostrophes'](./image.png)") == "./image.png"

    def test_path_with_spaces(self):
        assert extract_first_image("![Image](./my image.png)") == "./my image.png"

    def test_title_is_dropped(self):
        assert extract_first_image('![Shot](docs/shot.png "Screenshot")') == "docs/shot.png"


class TestExtractTechnologies:

    def test_bullet_list_with_markup(self):
        markdown = (
            "## Built With\n\n"
            "- [React](https://react.dev)\n"
            "* `TypeScript`\n"
            "- ![badge](https://img.shields.io/x.svg) Docker\n\n"
            "## License"
        )
        assert extract_technologies(markdown) == ["React", "TypeScript", "Docker"]

    def test_comma_separated_fallback(self):
        assert extract_technologies("## Tech Stack\nPython, Flask,\nPostgreSQL") == ["Python", "Flask", "PostgreSQL"]

    def test_rejects_long_tokens(self):
        long_item = "x" * 50
        markdown = f"## Technologies\n- Python\n- {long_item}\n- Go"
        assert extract_technologies(markdown) == ["Python", "Go"]

    def test_caps_at_twenty_entries(self):
        items = "\n".join(f"- Tech{i}" for i in range(30))
        result = extract_technologies(f"## Technologies\n{items}")
        assert len(result) == 20
        assert result[0] == "Tech0"
        assert result[-1] == "Tech19"

    def test_no_section_returns_empty_list(self):
        assert extract_technologies("## Abstract\nText") == []


class TestResolveImageUrl:

    def test_dot_slash_path(self):
        assert resolve_image_url("./img.png", "u", "r", "main") == "https://raw.githubusercontent.com/u/r/main/img.png"

    def test_leading_slash_path(self):
        assert (
            resolve_image_url("/images/screenshot.png", "user", "repo", "main")
            == "https://raw.githubusercontent.com/user/repo/main/images/screenshot.png"
        )

    def test_bare_path_and_branch(self):
        assert (
            resolve_image_url("assets/shot.png", "user", "repo", "develop")
            == "https://raw.githubusercontent.com/user/repo/develop/assets/shot.png"
        )

    def test_absolute_urls_unchanged(self):
        assert resolve_image_url("https://example.com/image.png", "u", "r", "main") == "https://example.com/image.png"
        assert resolve_image_url("http://example.com/image.png", "u", "r", "main") == "http://example.com/image.png"


class TestParseReadme:

    def test_abstract_only_has_no_image(self):
        result = parse_readme("# Project\n\n## Abstract\n\nThis is the project abstract.", "username", "repo", "main")
        assert result.abstract == "This is the project abstract."
        assert result.image_url is None
        assert result.technologies is None
        assert result.overview == ""

    def test_resolves_image_before_abstract(self):
        markdown = "# Project\n\n![Screenshot](./screenshot.png)\n\n## Abstract\n\nThis is the project abstract."
        result = parse_readme(markdown, "username", "repo", "main")
        assert result.image_url == "https://raw.githubusercontent.com/username/repo/main/screenshot.png"

    def test_collects_every_section(self):
        markdown = (
            "# Project\n\n## Abstract\nA.\n\n## Overview\nO.\n\n## Description\nD.\n\n"
            "## Project Description\nP.\n\n## Technologies\n- Python\n- Rust\n"
        )
        result = parse_readme(markdown, "u", "r", "main")
        assert (result.abstract, result.overview, result.description, result.project_description) == ("A.", "O.", "D.", "P.")
        assert result.technologies == ["Python", "Rust"]

    def test_image_without_sections(self):
        result = parse_readme("# Project\n\n![Screenshot](./image.png)\n\n## Features\n\nSome.", "username", "repo", "main")
        assert result.abstract == ""
        assert result.image_url == "https://raw.githubusercontent.com/username/repo/main/image.png"
