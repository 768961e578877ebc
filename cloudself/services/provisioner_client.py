"""Provisioner client: what an external provisioner uses to talk to us.

Wraps the /api/provisioner endpoints with requests:

- get_pending_websites(): fetch the pending queue (oldest first).
- update_website_status(): report "provisioned" with a pod IP, or
  "failed" with an error message.
- process_pending(handler): one poll cycle. handler(website) does the
  actual deployment and returns the pod IP; an exception from the
  handler is reported as a failure. A report that cannot be delivered
  is logged and skipped so the rest of the queue is still processed.
- run_forever(handler): poll on a fixed interval. No leases are taken,
  so only one provisioner should run against a backend.
"""

import logging
import time

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30  # seconds


class ProvisionerClientError(Exception):
    """Backend answered with an unexpected status code."""

    def __init__(self, status_code, body):
        super().__init__(f"unexpected status code {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class ProvisionerClient:
    def __init__(self, base_url, timeout=DEFAULT_TIMEOUT, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _check(self, resp):
        if resp.status_code != 200:
            raise ProvisionerClientError(resp.status_code, resp.text)
        return resp.json()

    def get_pending_websites(self):
        """Return the pending queue as a list of website dicts."""
        resp = self.session.get(
            f"{self.base_url}/api/provisioner/websites/pending",
            timeout=self.timeout,
        )
        return self._check(resp).get("data", [])

    def update_website_status(self, website_id, status, pod_ip_address=None,
                              error_message=None):
        """Report a status for one website. Returns the updated website dict."""
        body = {"status": status}
        if pod_ip_address is not None:
            body["podIpAddress"] = pod_ip_address
        if error_message is not None:
            body["errorMessage"] = error_message

        resp = self.session.put(
            f"{self.base_url}/api/provisioner/websites/{website_id}/status",
            json=body,
            timeout=self.timeout,
        )
        return self._check(resp).get("data")

    def process_pending(self, handler):
        """Run one poll cycle over the pending queue.

        Returns:
            dict with "provisioned", "failed" and "unreported" lists of
            website ids. A report the backend rejects (or a network error)
            is logged and lands in "unreported"; the cycle moves on.
        """
        result = {"provisioned": [], "failed": [], "unreported": []}

        for website in self.get_pending_websites():
            website_id = website["id"]
            try:
                pod_ip = handler(website)
            except Exception as e:
                logger.warning(
                    f"Provisioning failed for {website.get('websiteName')} "
                    f"(id={website_id}): {e}"
                )
                outcome = "failed"
                report = {"error_message": str(e) or type(e).__name__}
            else:
                outcome = "provisioned"
                report = {"pod_ip_address": pod_ip}

            try:
                self.update_website_status(website_id, outcome, **report)
            except (requests.RequestException, ProvisionerClientError) as e:
                # The next poll cycle sees the record again if it is still pending.
                logger.error(
                    f"Could not report {outcome} for {website.get('websiteName')} "
                    f"(id={website_id}): {e}"
                )
                result["unreported"].append(website_id)
                continue

            logger.info(
                f"Reported {website.get('websiteName')} (id={website_id}) as {outcome}"
            )
            result[outcome].append(website_id)

        return result

    def run_forever(self, handler, interval, sleep=time.sleep):
        """Poll every `interval` seconds until interrupted."""
        logger.info(f"Provisioner polling {self.base_url} every {interval}s")
        while True:
            try:
                self.process_pending(handler)
            except (requests.RequestException, ProvisionerClientError) as e:
                logger.error(f"Poll cycle failed: {e}")
            sleep(interval)
