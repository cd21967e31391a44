#!/usr/bin/env python3
"""
CHARTDOC TEMPLATE - README Rendering
------------------------------------
Renders the final README from a Jinja2 template. The template receives the
DocInfo as `doc` and the extracted rows as `rows`. A built-in template is
used when no template file is supplied.

Author: ChartDoc Team
Date: 2026-10-19
"""

import logging
from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, StrictUndefined, TemplateError

from chartdoc.core.errors import DocInfoError
from chartdoc.core.models import DocInfo, Row

logger = logging.getLogger("chartdoc.template")

DEFAULT_TEMPLATE = """\
# {{ doc.project.name }}

{{ doc.project.description }}

## TL;DR;

```console
$ helm repo add {{ doc.repository.name }} {{ doc.repository.url }}
$ helm repo update
$ helm search repo {{ doc.repository.name }}/{{ doc.chart.name }} --version={{ doc.chart.version }}
$ helm upgrade -i {{ doc.release.name }} {{ doc.repository.name }}/{{ doc.chart.name }} -n {{ doc.release.namespace }} --create-namespace --version={{ doc.chart.version }}
```

## Introduction

This chart deploys {{ doc.project.app }} on a [Kubernetes](http://kubernetes.io) cluster using the [Helm](https://helm.sh) package manager.

## Prerequisites
{% for item in doc.prerequisites %}
- {{ item }}
{%- endfor %}

## Installing the Chart

To install/upgrade the chart with the release name `{{ doc.release.name }}`:

```console
$ helm upgrade -i {{ doc.release.name }} {{ doc.repository.name }}/{{ doc.chart.name }} -n {{ doc.release.namespace }} --create-namespace --version={{ doc.chart.version }}
```

The command deploys {{ doc.project.app }} on the Kubernetes cluster in the default configuration. The [configuration](#configuration) section lists the parameters that can be configured during installation.

## Uninstalling the Chart

To uninstall the `{{ doc.release.name }}`:

```console
$ helm uninstall {{ doc.release.name }} -n {{ doc.release.namespace }}
```

The command removes all the Kubernetes components associated with the chart and deletes the release.

## Configuration

The following table lists the configurable parameters of the `{{ doc.chart.name }}` chart and their default values.

{{ doc.chart.values }}
{%- if doc.chart.values_example %}
Specify each parameter using the `--set key=value[,key=value]` argument to `helm upgrade -i`. For example:

```console
$ helm upgrade -i {{ doc.release.name }} {{ doc.repository.name }}/{{ doc.chart.name }} -n {{ doc.release.namespace }} --create-namespace --version={{ doc.chart.version }} --set {{ doc.chart.values_example }}
```
{% endif %}
Alternatively, a YAML file that specifies the values for the parameters can be provided while
installing the chart. For example:

```console
$ helm upgrade -i {{ doc.release.name }} {{ doc.repository.name }}/{{ doc.chart.name }} -n {{ doc.release.namespace }} --create-namespace --version={{ doc.chart.version }} --values values.yaml
```
{%- set examples = rows | selectattr("example") | list %}
{%- if examples %}

## Examples
{% for row in examples %}
`{{ row.path }}`:

```yaml
{{ row.example }}
```
{% endfor %}
{%- endif %}
"""


def load_template(path: Optional[str]) -> str:
    """
    Reads a template file, falling back to the built-in template when no
    path is given or the file does not exist.
    """
    if not path:
        return DEFAULT_TEMPLATE
    template_path = Path(path)
    if not template_path.exists():
        logger.info(f"Template {path} not found, using the built-in README template")
        return DEFAULT_TEMPLATE
    try:
        return template_path.read_text(encoding='utf-8-sig')
    except OSError as e:
        logger.error(f"Unable to read template {path}")
        raise DocInfoError(f"Failed to read template: {str(e)}") from e


def render_readme(doc: DocInfo, rows: Optional[List[Row]] = None,
                  template_text: Optional[str] = None) -> str:
    """Renders `doc` (and the rows) through a Jinja2 template."""
    env = Environment(undefined=StrictUndefined, keep_trailing_newline=True)
    try:
        template = env.from_string(template_text if template_text is not None else DEFAULT_TEMPLATE)
        return template.render(doc=doc, rows=rows or [])
    except TemplateError as e:
        logger.error(f"README template failed to render: {str(e)}")
        raise DocInfoError(f"Failed to render template: {str(e)}") from e
