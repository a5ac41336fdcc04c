import warnings

# google-cloud-compute and google-api-core emit FutureWarnings on import
# (interpreter support notices). They would be the first lines in the
# guardian's log on every boot, ahead of the launch summary.
warnings.filterwarnings("ignore", category=FutureWarning, module="google.api_core")
warnings.filterwarnings("ignore", category=FutureWarning, module="google.cloud")
