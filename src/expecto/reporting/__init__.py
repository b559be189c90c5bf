"""Console, JUnit XML and HTML output for test runs."""
