"""Fixed CloudFormation fragments merged into every compiled template.

The module-level constants are never handed out directly; callers get deep copies so one
compilation run cannot leak mutations into the next.
"""

from __future__ import annotations

import copy
from typing import Any

DEPLOYMENT_BUCKET_LOGICAL_ID = "ServerlessDeploymentBucket"
DEPLOYMENT_BUCKET_OUTPUT_ID = "ServerlessDeploymentBucketName"
IAM_ROLE_LOGICAL_ID = "IamRoleLambdaExecution"

_CORE_TEMPLATE: dict[str, Any] = {
    "AWSTemplateFormatVersion": "2010-09-09",
    "Description": "The AWS CloudFormation template for this Serverless application",
    "Resources": {
        DEPLOYMENT_BUCKET_LOGICAL_ID: {
            "Type": "AWS::S3::Bucket",
        },
    },
    "Outputs": {
        DEPLOYMENT_BUCKET_OUTPUT_ID: {
            "Value": {"Ref": DEPLOYMENT_BUCKET_LOGICAL_ID},
        },
    },
}

_IAM_ROLE_LAMBDA_EXECUTION: dict[str, Any] = {
    "Type": "AWS::IAM::Role",
    "Properties": {
        "AssumeRolePolicyDocument": {
            "Version": "2012-10-17",
            "Statement": [
                {
                    "Effect": "Allow",
                    "Principal": {"Service": ["lambda.amazonaws.com"]},
                    "Action": ["sts:AssumeRole"],
                }
            ],
        },
        "Path": "/",
        "Policies": [
            {
                "PolicyName": {"Fn::Join": ["-", [{"Ref": "AWS::StackName"}, "lambda"]]},
                "PolicyDocument": {
                    "Version": "2012-10-17",
                    "Statement": [
                        {
                            "Effect": "Allow",
                            "Action": [
                                "logs:CreateLogGroup",
                                "logs:CreateLogStream",
                                "logs:PutLogEvents",
                            ],
                            "Resource": "arn:aws:logs:*:*:*",
                        }
                    ],
                },
            }
        ],
    },
}

_IAM_POLICY_LAMBDA_VPC: dict[str, Any] = {
    "PolicyName": "IamPolicyLambdaVpc",
    "PolicyDocument": {
        "Version": "2012-10-17",
        "Statement": [
            {
                "Effect": "Allow",
                "Action": [
                    "ec2:CreateNetworkInterface",
                    "ec2:DescribeNetworkInterfaces",
                    "ec2:DetachNetworkInterface",
                    "ec2:DeleteNetworkInterface",
                ],
                "Resource": "*",
            }
        ],
    },
}


def core_template() -> dict[str, Any]:
    return copy.deepcopy(_CORE_TEMPLATE)


def iam_role_lambda_execution() -> dict[str, Any]:
    return copy.deepcopy(_IAM_ROLE_LAMBDA_EXECUTION)


def iam_policy_lambda_vpc() -> dict[str, Any]:
    return copy.deepcopy(_IAM_POLICY_LAMBDA_VPC)
