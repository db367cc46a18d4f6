from __future__ import annotations

from fastapi import APIRouter, Depends

from sls_deploy.models.deploy import CompileTemplateResponse, EmptyBucketResponse
from sls_deploy.models.manifest import ServiceManifest
from sls_deploy.services.dependencies import get_deploy_service
from sls_deploy.services.deploy_service import DeployService

router = APIRouter(tags=["deploy"])


@router.post("/deploy/template", response_model=CompileTemplateResponse)
async def compile_template(
    manifest: ServiceManifest,
    svc: DeployService = Depends(get_deploy_service),
) -> CompileTemplateResponse:
    compiled = await svc.compile_template(manifest)
    return CompileTemplateResponse(stack_name=compiled.stack_name, template=compiled.template)


@router.post("/remove/bucket", response_model=EmptyBucketResponse)
async def empty_deployment_bucket(
    manifest: ServiceManifest,
    svc: DeployService = Depends(get_deploy_service),
) -> EmptyBucketResponse:
    result = await svc.empty_deployment_bucket(manifest)
    return EmptyBucketResponse(bucket_name=result.bucket_name, deleted_count=result.deleted_count)
