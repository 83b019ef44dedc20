"""HTTP interface — FastAPI app over the service layer."""
