TEST_PROJECT_ID = "test-project"
TEST_BUCKET_NAME = "some-bucket"
TEST_TIMESTAMP_MS = 1700000000000
