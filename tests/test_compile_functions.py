from __future__ import annotations

from typing import Any

import pytest

from sls_deploy.services.compile.functions import FunctionCompiler, function_logical_id, normalize_name
from sls_deploy.services.errors import ConfigurationError


def _empty_template() -> dict[str, Any]:
    return {"Resources": {}, "Outputs": {}}


def _compile(manifest, stage: str = "dev") -> dict[str, Any]:
    template = _empty_template()
    FunctionCompiler(manifest, stage=stage).compile_functions(template)
    return template


def _expected_function(**overrides: Any) -> dict[str, Any]:
    properties = {
        "Code": {
            "S3Bucket": {"Ref": "ServerlessDeploymentBucket"},
            "S3Key": "somedir/artifact.zip",
        },
        "FunctionName": "new-service-dev-func",
        "Handler": "func.function.handler",
        "MemorySize": 1024,
        "Role": {"Fn::GetAtt": ["IamRoleLambdaExecution", "Arn"]},
        "Runtime": "nodejs4.3",
        "Timeout": 6,
    }
    properties.update(overrides)
    return {"Type": "AWS::Lambda::Function", "Properties": properties}


class TestLogicalNames:
    def test_capitalizes_first_letter(self):
        assert normalize_name("anotherFunc") == "AnotherFunc"

    def test_strips_separators(self):
        assert normalize_name("my-func_v2") == "Myfuncv2"

    def test_appends_suffix(self):
        assert function_logical_id("test") == "TestLambdaFunction"


class TestArtifacts:
    def test_throws_if_no_service_artifact(self, make_manifest):
        manifest = make_manifest(package={"artifact": None})
        with pytest.raises(ConfigurationError):
            _compile(manifest)

    def test_throws_if_no_individual_artifact(self, make_manifest):
        manifest = make_manifest(
            package={"individually": True},
            functions={"test": {"name": "test", "handler": "handler.hello"}},
        )
        with pytest.raises(ConfigurationError, match="test"):
            _compile(manifest)

    def test_missing_artifact_leaves_template_untouched(self, make_manifest):
        manifest = make_manifest(
            package={"individually": True},
            functions={
                "first": {"handler": "first.handler", "artifact": "first.zip"},
                "second": {"handler": "second.handler"},
            },
        )
        template = _empty_template()

        with pytest.raises(ConfigurationError):
            FunctionCompiler(manifest, stage="dev").compile_functions(template)

        assert template == _empty_template()

    def test_uses_service_artifact_if_not_individually(self, make_manifest):
        template = _compile(make_manifest(package={"individually": False}))

        code = template["Resources"]["TestLambdaFunction"]["Properties"]["Code"]
        assert code["S3Key"] == "somedir/artifact.zip"

    def test_uses_function_artifact_if_individually(self, make_manifest):
        template = _compile(make_manifest(package={"individually": True}))

        code = template["Resources"]["TestLambdaFunction"]["Properties"]["Code"]
        assert code["S3Key"] == "somedir/test.zip"

    def test_uses_last_path_segment_of_artifact(self, make_manifest):
        template = _compile(make_manifest(package={"artifact": "/tmp/.serverless/new-service.zip"}))

        code = template["Resources"]["TestLambdaFunction"]["Properties"]["Code"]
        assert code["S3Key"] == "somedir/new-service.zip"

    def test_uses_configured_deployment_bucket(self, make_manifest):
        template = _compile(make_manifest(provider={"deploymentBucket": "com.serverless.deploys"}))

        code = template["Resources"]["TestLambdaFunction"]["Properties"]["Code"]
        assert code["S3Bucket"] == "com.serverless.deploys"


class TestFunctionResources:
    def test_throws_if_handler_missing(self, make_manifest):
        manifest = make_manifest(functions={"func": {"name": "new-service-dev-func"}})
        template = _empty_template()

        with pytest.raises(ConfigurationError, match="handler"):
            FunctionCompiler(manifest, stage="dev").compile_functions(template)

        assert template["Resources"] == {}

    def test_creates_simple_function_resource(self, make_manifest):
        manifest = make_manifest(
            functions={"func": {"handler": "func.function.handler", "name": "new-service-dev-func"}}
        )

        template = _compile(manifest)

        assert template["Resources"]["FuncLambdaFunction"] == _expected_function()

    def test_default_function_name_uses_service_and_stage(self, make_manifest):
        manifest = make_manifest(functions={"func": {"handler": "func.function.handler"}})

        template = _compile(manifest, stage="prod")

        properties = template["Resources"]["FuncLambdaFunction"]["Properties"]
        assert properties["FunctionName"] == "new-service-prod-func"

    def test_creates_function_resource_with_vpc_config(self, make_manifest):
        manifest = make_manifest(
            functions={
                "func": {
                    "handler": "func.function.handler",
                    "name": "new-service-dev-func",
                    "vpc": {"securityGroupIds": ["xxx"], "subnetIds": ["xxx"]},
                }
            }
        )

        template = _compile(manifest)

        assert template["Resources"]["FuncLambdaFunction"] == _expected_function(
            VpcConfig={"SecurityGroupIds": ["xxx"], "SubnetIds": ["xxx"]}
        )

    def test_considers_function_based_config(self, make_manifest):
        manifest = make_manifest(
            functions={
                "func": {
                    "name": "customized-func-function",
                    "handler": "func.function.handler",
                    "memorySize": 128,
                    "timeout": 10,
                }
            }
        )

        template = _compile(manifest)

        assert template["Resources"]["FuncLambdaFunction"] == _expected_function(
            FunctionName="customized-func-function",
            MemorySize=128,
            Timeout=10,
        )

    def test_defaults_runtime_when_provider_runtime_unset(self, make_manifest):
        manifest = make_manifest(
            provider={"runtime": None},
            functions={"func": {"handler": "func.function.handler", "name": "new-service-dev-func"}},
        )

        template = _compile(manifest)

        assert template["Resources"]["FuncLambdaFunction"] == _expected_function()

    def test_considers_provider_runtime_and_memory_size(self, make_manifest):
        manifest = make_manifest(
            provider={"runtime": "python2.7", "memorySize": 128},
            functions={"func": {"handler": "func.function.handler", "name": "new-service-dev-func"}},
        )

        template = _compile(manifest)

        assert template["Resources"]["FuncLambdaFunction"] == _expected_function(
            MemorySize=128,
            Runtime="python2.7",
        )

    def test_function_settings_take_precedence_over_provider(self, make_manifest):
        manifest = make_manifest(
            provider={"runtime": "python2.7", "memorySize": 128, "timeout": 30},
            functions={
                "func": {
                    "handler": "func.function.handler",
                    "runtime": "nodejs6.10",
                    "memorySize": 512,
                    "timeout": 3,
                }
            },
        )

        properties = _compile(manifest)["Resources"]["FuncLambdaFunction"]["Properties"]

        assert (properties["Runtime"], properties["MemorySize"], properties["Timeout"]) == ("nodejs6.10", 512, 3)

    def test_uses_iam_role_arn(self, make_manifest):
        manifest = make_manifest(
            provider={"iamRoleARN": "some:aws:arn:xxx:*:*"},
            functions={"func": {"handler": "func.function.handler", "name": "new-service-dev-func"}},
        )

        template = _compile(manifest)

        assert template["Resources"]["FuncLambdaFunction"]["Properties"]["Role"] == "some:aws:arn:xxx:*:*"

    def test_rejects_duplicate_logical_ids(self, make_manifest):
        manifest = make_manifest(
            functions={
                "my-func": {"handler": "a.handler"},
                "my_func": {"handler": "b.handler"},
            }
        )
        template = _empty_template()

        with pytest.raises(ConfigurationError, match="MyfuncLambdaFunction"):
            FunctionCompiler(manifest, stage="dev").compile_functions(template)

        assert template["Resources"] == {}

    @pytest.mark.parametrize("key", ["-", "__"])
    def test_rejects_keys_without_alphanumeric_characters(self, make_manifest, key):
        manifest = make_manifest(functions={key: {"handler": "a.handler"}})
        template = _empty_template()

        with pytest.raises(ConfigurationError, match="alphanumeric"):
            FunctionCompiler(manifest, stage="dev").compile_functions(template)

        assert template["Resources"] == {}

    def test_vpc_config_does_not_share_manifest_lists(self, make_manifest):
        manifest = make_manifest(
            functions={
                "func": {
                    "handler": "func.function.handler",
                    "vpc": {"securityGroupIds": ["sg-1"], "subnetIds": ["subnet-1"]},
                }
            }
        )

        template = _compile(manifest)
        vpc_config = template["Resources"]["FuncLambdaFunction"]["Properties"]["VpcConfig"]
        vpc_config["SecurityGroupIds"].append("sg-2")
        vpc_config["SubnetIds"].append("subnet-2")

        assert manifest.functions["func"].vpc.security_group_ids == ["sg-1"]
        assert manifest.functions["func"].vpc.subnet_ids == ["subnet-1"]

    def test_keeps_existing_resources(self, make_manifest):
        template = {"Resources": {"Existing": {"Type": "AWS::SNS::Topic"}}, "Outputs": {}}

        FunctionCompiler(make_manifest(), stage="dev").compile_functions(template)

        assert set(template["Resources"]) == {"Existing", "TestLambdaFunction"}


def test_creates_function_outputs(make_manifest):
    manifest = make_manifest(
        functions={
            "func": {"handler": "func.function.handler"},
            "anotherFunc": {"handler": "anotherFunc.function.handler"},
        }
    )

    template = _compile(manifest)

    assert template["Outputs"] == {
        "FuncLambdaFunctionArn": {
            "Description": "Lambda function info",
            "Value": {"Fn::GetAtt": ["FuncLambdaFunction", "Arn"]},
        },
        "AnotherFuncLambdaFunctionArn": {
            "Description": "Lambda function info",
            "Value": {"Fn::GetAtt": ["AnotherFuncLambdaFunction", "Arn"]},
        },
    }
