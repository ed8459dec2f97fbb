# -*- coding: utf-8 -*-
"""
AWS Lambda handler for the plant diagnosis proxy using API Gateway/Lambda Function URL events.
"""
import traceback

import awsgi

from plant_diagnosis.app import create_app

# WSGI app cached at import time; GEMINI_API_KEY is read from the function environment.
app = create_app()


def handler(event, context):
    """Lambda entrypoint (inputs: event/context; output: API response dict)."""
    # awsgi turns the proxy event into a WSGI environ and the Flask response back into a dict.
    try:
        return awsgi.response(app, event, context)
    except Exception:
        # Keep adapter failures observable in CloudWatch with a full traceback.
        print("Unhandled error in Lambda handler:")
        print(traceback.format_exc())
        raise
