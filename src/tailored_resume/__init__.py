"""Assemble tailored resumes from detected content and render them as documents."""


def main() -> int:
    """Run the ``tailored-resume`` command.

    Returns:
        Process exit code.
    """
    from tailored_resume.cli import main as cli_main

    return cli_main()
