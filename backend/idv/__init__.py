"""IDV demo backend — multi-source identity verification and client registration."""
