"""Value records and failures shared by the calculation engine."""
