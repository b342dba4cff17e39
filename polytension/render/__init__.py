"""Drawing surfaces and frame export."""
